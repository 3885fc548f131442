#!/usr/bin/env python3
"""
SEMESTER EDITOR - Value-returning edits over a transcript's semester list
Grade simulation, course edits and future-semester planning

OPERATIONS:
✅ change_grade / edit_course: Points recomputed from the grade table
✅ add_course / remove_course: Placeholder course is 3.0 credits, grade C
✅ add_semester / remove_semester / rename_semester: Future semester planning
✅ start_manual_session: Blank record for entering a transcript by hand

Every operation returns a new list. The touched semester is recomputed, the
others are passed through unchanged, and the input list is never modified.
Unknown semester ids raise KeyError and bad course positions raise IndexError.
"""

from typing import List, Optional, Sequence, Union
from uuid import uuid4
import logging

from data_models import Course, Semester, StudentIdentity, TranscriptRecord
from gpa_calculator import course_points, recompute_semester
from ledger_config import (
    DEFAULT_COURSE_CREDITS,
    DEFAULT_COURSE_GRADE,
    FUTURE_SEMESTER_PREFIX,
    MANUAL_ENTRY_NAME,
    MANUAL_ENTRY_PROGRAM,
    MANUAL_ENTRY_REG_STATUS,
    MANUAL_ENTRY_STUDENT_NO,
    NEW_COURSE_PREFIX,
)

logger = logging.getLogger(__name__)


def placeholder_course() -> Course:
    """Course added by "add course": unique temporary code, 3.0 credits, C"""
    return Course(
        code=f"{NEW_COURSE_PREFIX}-{uuid4().hex[:8].upper()}",
        title="",
        credits=DEFAULT_COURSE_CREDITS,
        grade=DEFAULT_COURSE_GRADE,
        points=course_points(DEFAULT_COURSE_GRADE, DEFAULT_COURSE_CREDITS),
    )


def parse_credits(value: Union[str, float, int, None]) -> float:
    """Credits typed by the user; anything unparseable or negative is 0.0"""
    try:
        credits = float(value)
    except (TypeError, ValueError):
        return 0.0
    if credits != credits or credits < 0:  # NaN
        return 0.0
    return credits


def _semester_index(semesters: Sequence[Semester], semester_id: str) -> int:
    for index, semester in enumerate(semesters):
        if semester.id == semester_id:
            return index
    raise KeyError(f"No semester with id {semester_id!r}")


def _replace_courses(
    semesters: Sequence[Semester], semester_id: str, courses: List[Course]
) -> List[Semester]:
    index = _semester_index(semesters, semester_id)
    updated = list(semesters)
    updated[index] = recompute_semester(semesters[index].model_copy(update={"courses": tuple(courses)}))
    return updated


def _course_at(semester: Semester, position: int) -> Course:
    if not 0 <= position < len(semester.courses):
        raise IndexError(
            f"{semester.name} has {len(semester.courses)} courses, no position {position}"
        )
    return semester.courses[position]


def change_grade(
    semesters: Sequence[Semester], semester_id: str, position: int, grade: str
) -> List[Semester]:
    """Set a course's grade and recompute its points"""
    semester = semesters[_semester_index(semesters, semester_id)]
    course = _course_at(semester, position)

    updated_course = Course(
        code=course.code,
        title=course.title,
        credits=course.credits,
        grade=grade,
        points=course_points(grade, course.credits),
        is_repeat=course.is_repeat,
    )
    logger.debug(f"{semester.name}: {course.code} {course.grade} -> {updated_course.grade}")

    courses = list(semester.courses)
    courses[position] = updated_course
    return _replace_courses(semesters, semester_id, courses)


def edit_course(
    semesters: Sequence[Semester],
    semester_id: str,
    position: int,
    code: Optional[str] = None,
    title: Optional[str] = None,
    credits: Union[str, float, int, None] = None,
) -> List[Semester]:
    """
    Edit a course's code, title or credits

    Args:
        semesters: Current semester list
        semester_id: Semester holding the course
        position: Course position within the semester
        code: New course code, if changing
        title: New title, if changing
        credits: New credits as typed; unparseable input becomes 0.0

    Returns:
        New semester list with the semester recomputed
    """
    semester = semesters[_semester_index(semesters, semester_id)]
    course = _course_at(semester, position)

    new_credits = course.credits if credits is None else parse_credits(credits)
    updated_course = Course(
        code=course.code if code is None else code,
        title=course.title if title is None else title,
        credits=new_credits,
        grade=course.grade,
        points=course_points(course.grade, new_credits),
        is_repeat=course.is_repeat,
    )

    courses = list(semester.courses)
    courses[position] = updated_course
    return _replace_courses(semesters, semester_id, courses)


def add_course(
    semesters: Sequence[Semester], semester_id: str, course: Optional[Course] = None
) -> List[Semester]:
    """Append a course (a placeholder when none is given)"""
    semester = semesters[_semester_index(semesters, semester_id)]
    new_course = course if course is not None else placeholder_course()
    return _replace_courses(semesters, semester_id, list(semester.courses) + [new_course])


def remove_course(semesters: Sequence[Semester], semester_id: str, position: int) -> List[Semester]:
    semester = semesters[_semester_index(semesters, semester_id)]
    _course_at(semester, position)
    courses = [c for i, c in enumerate(semester.courses) if i != position]
    return _replace_courses(semesters, semester_id, courses)


def add_semester(semesters: Sequence[Semester], name: Optional[str] = None) -> List[Semester]:
    """Append a future semester holding one placeholder course"""
    semester = recompute_semester(
        Semester(
            id=f"{FUTURE_SEMESTER_PREFIX}-{uuid4().hex[:12]}",
            name=name or f"Future Semester {len(semesters) + 1}",
            courses=[placeholder_course()],
        )
    )
    logger.info(f"➕ Added {semester.name}")
    return list(semesters) + [semester]


def remove_semester(semesters: Sequence[Semester], semester_id: str) -> List[Semester]:
    _semester_index(semesters, semester_id)
    return [semester for semester in semesters if semester.id != semester_id]


def rename_semester(semesters: Sequence[Semester], semester_id: str, name: str) -> List[Semester]:
    index = _semester_index(semesters, semester_id)
    updated = list(semesters)
    updated[index] = semesters[index].model_copy(update={"name": name})
    return updated


def start_manual_session() -> TranscriptRecord:
    """Record for entering grades by hand: one semester, one placeholder course"""
    student = StudentIdentity(
        name=MANUAL_ENTRY_NAME,
        father_name="-",
        student_no=MANUAL_ENTRY_STUDENT_NO,
        program=MANUAL_ENTRY_PROGRAM,
        reg_status=MANUAL_ENTRY_REG_STATUS,
    )
    semesters = add_semester([], name="Semester 1")
    return TranscriptRecord(student=student, semesters=semesters)


def with_semesters(record: TranscriptRecord, semesters: Sequence[Semester]) -> TranscriptRecord:
    """Same student, edited semester list"""
    return record.model_copy(update={"semesters": tuple(semesters)})
