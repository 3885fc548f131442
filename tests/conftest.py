"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Course / semester factories
- Sample transcript text as produced by page text extraction
"""

import pytest

# Add src to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from data_models import Course, Semester
from gpa_calculator import course_points, recompute_semester


SAMPLE_TRANSCRIPT_TEXT = """UNIVERSITY OF LAHORE
Student Name: Ayesha  Khan
Father's
Name: Imran Khan Student No: 70012345
Reg Status Active Program: BS Computer
Science Course Code Course Title Credit Hours Grade
Semester 1 Fall Semester 2022
CS-1101 Programming Fundamentals 4.0 B+
MATH-1101 Calculus I 3.0 C
ENG1101 Functional English 3.0 A-
SGPA: 3.13
Semester 2 S p r i n g Semester 20
23
CS-1201 Object Oriented Programming 4.0 A
MATH-1101 Calculus I 3.0 B+ Repeat
PHY1115 Applied Physics 3.0 W
SGPA: 3.79
CUMULATIVE GRADE POINT AVERAGE(CG
PA) = 3.31
"""

END_TO_END_TEXT = (
    "Student Name: Jane Doe Father's Name: John Doe Student No: 12345 "
    "Reg Status Active Program: BSCS Course Code Course Title Credits Grade\n"
    "Semester 1 Fall Semester 2023\n"
    "CS101 Intro 3.0 A\n"
    "MATH101 Calc 3.0 F\n"
)


@pytest.fixture
def make_course():
    """Factory for courses with points computed from the grade table"""

    def _make(code, grade, credits=3.0, title="", is_repeat=False):
        return Course(
            code=code,
            title=title,
            credits=credits,
            grade=grade,
            points=course_points(grade, credits),
            is_repeat=is_repeat,
        )

    return _make


@pytest.fixture
def make_semester():
    """Factory for recomputed semesters"""

    def _make(semester_id, courses, name=None):
        return recompute_semester(
            Semester(id=semester_id, name=name or semester_id, courses=courses)
        )

    return _make


@pytest.fixture
def sample_semesters(make_course, make_semester):
    """Three semesters with one retake (MATH101 C -> A) and one withdrawal"""
    return [
        make_semester("sem-0", [
            make_course("CS101", "B+", 4.0, "Programming Fundamentals"),
            make_course("MATH101", "C", 3.0, "Calculus I"),
        ]),
        make_semester("sem-1", [
            make_course("CS201", "A", 3.0, "Data Structures"),
            make_course("PHY101", "W", 3.0, "Applied Physics"),
        ]),
        make_semester("sem-2", [
            make_course("MATH-101", "A", 3.0, "Calculus I", is_repeat=True),
            make_course("CS301", "F", 3.0, "Operating Systems"),
        ]),
    ]


@pytest.fixture
def sample_transcript_text():
    return SAMPLE_TRANSCRIPT_TEXT


@pytest.fixture
def end_to_end_text():
    return END_TO_END_TEXT
