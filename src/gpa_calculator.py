#!/usr/bin/env python3
"""
GPA CALCULATOR - Semester SGPA, retake-aware CGPA and CGPA progression
Deterministic grade-point ledger over a list of semesters

CALCULATION TYPES:
✅ Semester GPA: Credit-weighted mean over one semester's counted courses
✅ Cumulative GPA: All semesters, each course counted once (best attempt)
✅ Progression: Cumulative GPA as of each semester, in document order
✅ Earned vs attempted credits

GRADE MAPPING:
A  = 4.00, A- = 3.75
B+ = 3.50, B  = 3.00
C+ = 2.50, C  = 2.00
D+ = 1.50, D  = 1.00
F  = 0.00
W/I = 0, not counted in any credit or point total

EDGE CASES HANDLED:
- Withdrawn courses: credits zeroed in points, excluded from all sums
- Incomplete courses: points still stored as grade x credits, excluded from sums
- Repeated courses: best grade-points-per-credit attempt counts, earlier wins ties
- Zero credits: GPA is 0, never a division error
- Unknown grades: score 0, never an error

Dependencies: data_models.py for type definitions
"""

from typing import Dict, List, Sequence
from dataclasses import dataclass
import logging

from data_models import Course, GpaSummary, LetterGrade, ProgressionPoint, Semester
from ledger_config import PROBATION_THRESHOLD, STANDING_GOOD, STANDING_PROBATION

logger = logging.getLogger(__name__)


# Grade point mapping
GRADE_POINTS = {
    "A": 4.00,
    "A-": 3.75,
    "B+": 3.50,
    "B": 3.00,
    "C+": 2.50,
    "C": 2.00,
    "D+": 1.50,
    "D": 1.00,
    "F": 0.00,
    "W": 0.0,  # Withdrawn
    "I": 0.0,  # Incomplete
}

# Grades that don't count in any total
NON_GPA_GRADES = {LetterGrade.W.value, LetterGrade.I.value}

# Canonical grade order (high to low)
GRADES_ORDER = [g.value for g in LetterGrade if g.value not in NON_GPA_GRADES]

FAILING_GRADE = LetterGrade.F.value
WITHDRAWN_GRADE = LetterGrade.W.value


@dataclass
class LedgerResult:
    """Everything the presentation layer needs after an edit"""

    semesters: List[Semester]
    summary: GpaSummary
    progression: List[ProgressionPoint]


def normalize_grade(grade: str) -> str:
    """Strip, upper-case and map the typographic minus to a hyphen"""
    return str(grade).strip().upper().replace("−", "-")


def grade_points(grade: str) -> float:
    """
    Convert a letter grade to grade points

    Unknown grade strings score 0.0 so that every aggregation stays total.
    """
    key = normalize_grade(grade)
    if key not in GRADE_POINTS:
        logger.debug(f"Unknown grade format: {grade!r} - counted as 0.00")
        return 0.0
    return GRADE_POINTS[key]


def course_points(grade: str, credits: float) -> float:
    """Grade points x credits; a withdrawal never carries its credits"""
    if normalize_grade(grade) == WITHDRAWN_GRADE:
        return grade_points(grade) * 0
    return grade_points(grade) * credits


def normalize_course_code(code: str) -> str:
    """Retake identity: whitespace and hyphens removed, upper-cased"""
    return "".join(ch for ch in code if not ch.isspace() and ch != "-").upper()


def is_counted(course: Course) -> bool:
    """W and I never enter a credit or point total"""
    return normalize_grade(course.grade) not in NON_GPA_GRADES


def recompute_semester(semester: Semester) -> Semester:
    """
    Recalculate a semester's derived totals from its course list

    Args:
        semester: Semester whose courses may have been edited

    Returns:
        New Semester with sgpa, total_credits and total_points refreshed
    """
    effective_courses = [course for course in semester.courses if is_counted(course)]

    total_credits = sum(course.credits for course in effective_courses)
    total_points = sum(course.points for course in effective_courses)
    sgpa = total_points / total_credits if total_credits > 0 else 0.0

    return semester.model_copy(
        update={
            "sgpa": sgpa,
            "total_credits": total_credits,
            "total_points": total_points,
        }
    )


def _attempt_ratio(course: Course) -> float:
    return course.points / max(course.credits, 1)


def select_best_attempts(semesters: Sequence[Semester]) -> Dict[str, Course]:
    """
    Pick one attempt per normalized course code

    The first attempt is kept unless a later one has a strictly higher
    grade-points-per-credit ratio. Equal ratios keep the earlier attempt.
    """
    best: Dict[str, Course] = {}

    for semester in semesters:
        for course in semester.courses:
            key = normalize_course_code(course.code)
            existing = best.get(key)
            if existing is None:
                best[key] = course
            elif _attempt_ratio(course) > _attempt_ratio(existing):
                logger.debug(
                    f"Retake {course.code}: {course.grade} replaces {existing.grade}"
                )
                best[key] = course

    return best


def compute_cgpa(semesters: Sequence[Semester]) -> GpaSummary:
    """
    Calculate retake-aware cumulative GPA

    Args:
        semesters: Semesters in document / insertion order

    Returns:
        GpaSummary with CGPA formatted to two decimals
    """
    total_points = 0.0
    total_credits = 0.0  # Attempted credits for GPA (includes F)
    total_earned_credits = 0.0  # Earned credits (excludes F)

    for course in select_best_attempts(semesters).values():
        if not is_counted(course):
            continue

        total_credits += course.credits
        total_points += course.points

        if normalize_grade(course.grade) != FAILING_GRADE:
            total_earned_credits += course.credits

    cgpa = f"{total_points / total_credits:.2f}" if total_credits > 0 else "0.00"

    return GpaSummary(
        cgpa=cgpa,
        total_credits=total_credits,
        total_points=total_points,
        total_earned_credits=total_earned_credits,
    )


def compute_progression(semesters: Sequence[Semester]) -> List[ProgressionPoint]:
    """
    Calculate the CGPA as of each semester

    Each point is the full retake-aware CGPA of the semester prefix ending at
    that semester, so a retake taken later never changes an earlier point.
    """
    progression = []

    for index, semester in enumerate(semesters):
        stats = compute_cgpa(semesters[: index + 1])
        progression.append(
            ProgressionPoint(
                semester_id=semester.id,
                cumulative_cgpa=stats.cgpa,
                cumulative_credits=stats.total_credits,
            )
        )

    return progression


def raw_attempted_credits(semesters: Sequence[Semester]) -> float:
    """Every non-withdrawn credit on the transcript, retakes included"""
    return sum(
        course.credits
        for semester in semesters
        for course in semester.courses
        if normalize_grade(course.grade) != WITHDRAWN_GRADE
    )


def academic_standing(cgpa: str) -> str:
    """GOOD at or above the probation threshold, PROBATION below it"""
    try:
        value = float(cgpa)
    except (TypeError, ValueError):
        value = 0.0
    return STANDING_GOOD if value >= PROBATION_THRESHOLD else STANDING_PROBATION


def calculate_ledger(semesters: Sequence[Semester]) -> LedgerResult:
    """
    Cumulative summary and progression for the current semester list

    Semesters are passed through as given: a parsed semester keeps the SGPA
    printed on the transcript until an edit recomputes it.
    """
    semesters = list(semesters)
    summary = compute_cgpa(semesters)

    logger.debug(
        f"Ledger: {len(semesters)} semesters, CGPA {summary.cgpa}, "
        f"{summary.total_credits:.1f} attempted / {summary.total_earned_credits:.1f} earned"
    )

    return LedgerResult(
        semesters=semesters,
        summary=summary,
        progression=compute_progression(semesters),
    )
