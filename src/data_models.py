#!/usr/bin/env python3
"""
DATA MODELS - Pydantic schemas for transcript ledger data
Type-safe, immutable structures for parsed transcripts and GPA results

MODELS:
✅ StudentIdentity: Name, guardian, student number, program, reg status, footer CGPA
✅ Course: Code, title, credits, grade, grade points, repeat flag
✅ Semester: Ordered courses plus derived SGPA / credit / point totals
✅ TranscriptRecord: Identity + semesters in document order
✅ GpaSummary / ProgressionPoint: Ledger engine results

VALIDATION RULES:
- Credits must be non-negative
- Grades are stripped and upper-cased; unknown grades are kept (they score 0)
- Missing identity fields hold the "Unknown" sentinel, never an empty string
- Models are frozen and hold tuples: edits produce new values via model_copy(update=...)

Dependencies: Pydantic for validation
"""

from typing import Optional, List, Tuple
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger_config import (
    DEFAULT_REPORTED_CGPA,
    MANUAL_ENTRY_STUDENT_NO,
    UNKNOWN,
)


class LetterGrade(str, Enum):
    """Valid grades, canonical order high to low, then non-grade markers"""
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D_PLUS = "D+"
    D = "D"
    F = "F"
    W = "W"  # Withdrawn
    I = "I"  # Incomplete


class StudentIdentity(BaseModel):
    """Student identity block read from the transcript header"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(UNKNOWN, description="Student name")
    father_name: str = Field(UNKNOWN, description="Father's / guardian name")
    student_no: str = Field(UNKNOWN, description="Student number")
    program: str = Field(UNKNOWN, description="Degree program")
    reg_status: str = Field(UNKNOWN, description="Registration status")
    cgpa: str = Field(DEFAULT_REPORTED_CGPA, description="Self-reported CGPA from the document footer")

    @field_validator("name", "father_name", "student_no", "program", "reg_status")
    @classmethod
    def blank_is_unknown(cls, v):
        """An empty capture is not a parsed value"""
        v = " ".join(str(v).split())
        return v or UNKNOWN

    def missing_fields(self) -> List[str]:
        """Identity fields the parser could not recover"""
        return [
            field_name
            for field_name in ("name", "father_name", "student_no", "program", "reg_status")
            if getattr(self, field_name) == UNKNOWN
        ]


class Course(BaseModel):
    """Individual course attempt"""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Course code, e.g. CS-101")
    title: str = Field("", description="Course title (may be empty)")
    credits: float = Field(..., ge=0.0, description="Credit hours")
    grade: str = Field(..., description="Letter grade, W or I")
    points: float = Field(0.0, description="Grade points x credits (credits zeroed for W)")
    is_repeat: bool = Field(False, description="Annotated as a retake on the transcript")

    @field_validator("code", "title")
    @classmethod
    def strip_text(cls, v):
        return v.strip()

    @field_validator("grade")
    @classmethod
    def normalize_grade(cls, v):
        """Upper-case and map the typographic minus to a hyphen"""
        return v.strip().upper().replace("−", "-")


class Semester(BaseModel):
    """One semester of courses with derived totals"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable identifier (sem-<n> or future-sem-<hex>)")
    name: str = Field(..., description="Display name, e.g. 'Semester 1 - Fall 2023'")
    courses: Tuple[Course, ...] = Field(default_factory=tuple)

    number: Optional[int] = Field(None, description="Semester number from the header")
    season: Optional[str] = Field(None, description="Spring, Summer or Fall")
    year: Optional[int] = Field(None, description="Calendar year from the header")

    # Derived - always produced by gpa_calculator.recompute_semester
    sgpa: float = Field(0.0, ge=0.0, description="Semester GPA")
    total_credits: float = Field(0.0, ge=0.0, description="Credits counted in SGPA")
    total_points: float = Field(0.0, ge=0.0, description="Grade points counted in SGPA")
    reported_sgpa: Optional[float] = Field(None, description="SGPA printed on the transcript")

    @property
    def is_future(self) -> bool:
        """Semester added by the user rather than parsed"""
        return self.id.startswith("future-")


class TranscriptRecord(BaseModel):
    """Complete parsed transcript"""

    model_config = ConfigDict(frozen=True)

    student: StudentIdentity = Field(default_factory=StudentIdentity)
    semesters: Tuple[Semester, ...] = Field(default_factory=tuple)

    @property
    def is_manual(self) -> bool:
        """Record created by a manual-entry session instead of a parse"""
        return self.student.student_no == MANUAL_ENTRY_STUDENT_NO

    @property
    def course_count(self) -> int:
        return sum(len(semester.courses) for semester in self.semesters)


class GpaSummary(BaseModel):
    """Cumulative GPA result with credit breakdown"""

    model_config = ConfigDict(frozen=True)

    cgpa: str = Field(..., description="Cumulative GPA, two decimals")
    total_credits: float = Field(..., ge=0.0, description="Attempted credits (includes F)")
    total_points: float = Field(..., ge=0.0, description="Grade points over counted courses")
    total_earned_credits: float = Field(..., ge=0.0, description="Credits toward degree (excludes F)")


class ProgressionPoint(BaseModel):
    """Cumulative CGPA as of and including one semester"""

    model_config = ConfigDict(frozen=True)

    semester_id: str
    cumulative_cgpa: str
    cumulative_credits: float


# Export all models
__all__ = [
    "LetterGrade",
    "StudentIdentity",
    "Course",
    "Semester",
    "TranscriptRecord",
    "GpaSummary",
    "ProgressionPoint",
]
