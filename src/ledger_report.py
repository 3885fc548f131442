#!/usr/bin/env python3
"""
LEDGER REPORT - Tabular views of a transcript ledger
Semester and course tables as pandas DataFrames, optional CSV output

TABLES:
✅ Semester table: SGPA, counted credits/points, cumulative CGPA and credits
✅ Course table: Every course attempt with grade points and retake status

Dependencies: pandas, gpa_calculator
"""

from pathlib import Path
from typing import Optional, Sequence
import logging

import pandas as pd

from data_models import Semester, TranscriptRecord
from gpa_calculator import (
    compute_progression,
    is_counted,
    normalize_course_code,
    select_best_attempts,
)

logger = logging.getLogger(__name__)

SEMESTER_COLUMNS = [
    "Semester ID",
    "Semester",
    "Courses",
    "SGPA",
    "Credits",
    "Points",
    "Cumulative CGPA",
    "Cumulative Credits",
]

COURSE_COLUMNS = [
    "Semester",
    "Code",
    "Title",
    "Credits",
    "Grade",
    "Points",
    "Repeat",
    "Counts Toward CGPA",
]


def build_semester_table(semesters: Sequence[Semester]) -> pd.DataFrame:
    """One row per semester, in document order"""
    progression = {point.semester_id: point for point in compute_progression(semesters)}

    records = []
    for semester in semesters:
        point = progression[semester.id]
        records.append({
            "Semester ID": semester.id,
            "Semester": semester.name,
            "Courses": len(semester.courses),
            "SGPA": round(semester.sgpa, 2),
            "Credits": semester.total_credits,
            "Points": semester.total_points,
            "Cumulative CGPA": point.cumulative_cgpa,
            "Cumulative Credits": point.cumulative_credits,
        })

    return pd.DataFrame(records, columns=SEMESTER_COLUMNS)


def build_course_table(semesters: Sequence[Semester]) -> pd.DataFrame:
    """
    One row per course attempt

    "Counts Toward CGPA" marks the attempt that wins retake resolution over
    the whole transcript (W and I attempts are marked False).
    """
    winners = select_best_attempts(semesters)

    records = []
    for semester in semesters:
        for course in semester.courses:
            winner = winners.get(normalize_course_code(course.code))
            records.append({
                "Semester": semester.name,
                "Code": course.code,
                "Title": course.title,
                "Credits": course.credits,
                "Grade": course.grade,
                "Points": course.points,
                "Repeat": course.is_repeat,
                "Counts Toward CGPA": winner is course and is_counted(course),
            })

    return pd.DataFrame(records, columns=COURSE_COLUMNS)


def save_ledger_report(record: TranscriptRecord, output_path: Optional[Path] = None) -> pd.DataFrame:
    """
    Build the semester table for a record and optionally write it as CSV

    Args:
        record: Parsed or edited transcript
        output_path: Optional path to save CSV report

    Returns:
        Semester DataFrame
    """
    df = build_semester_table(record.semesters)

    if output_path:
        df.to_csv(output_path, index=False)
        logger.info(f"Ledger report saved to: {output_path}")

    return df
