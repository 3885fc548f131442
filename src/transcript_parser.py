#!/usr/bin/env python3
"""
TRANSCRIPT PARSER - Recover a structured record from extracted transcript text
Tolerant, anchor-based field recovery for one fixed tabular transcript layout

EXTRACTION STAGES:
✅ Student identity: Label anchors, value = text up to the next known label
✅ Footer CGPA: "CUMULATIVE GRADE POINT AVERAGE (CGPA) = x.xx"
✅ Semester headers: "Semester <n> <Season> Semester <yyyy>", every occurrence
✅ Course lines: CODE TITLE CREDITS GRADE [Repeat] inside each semester block
✅ Semester SGPA: Printed "SGPA" value kept as the initial semester GPA

TOLERANCE RULES:
- Text extraction inserts line breaks and extra spaces anywhere, including
  inside words ("S p r i n g", "20\\n23", "CG\\nPA"), so every label token is
  matched with optional whitespace between its parts
- Captured values have whitespace runs collapsed to a single space
- A missing identity field becomes "Unknown"; the rest of the parse goes on
- A semester block without course lines is dropped

FAILURE:
- extract_transcript() raises TranscriptParseError when no semester with
  courses is recognized, carrying what was expected, what was found and an
  excerpt of the unrecognized text

Dependencies: data_models.py, gpa_calculator.py
"""

import re
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from data_models import Course, Semester, StudentIdentity, TranscriptRecord
from gpa_calculator import course_points, recompute_semester
from ledger_config import (
    DEFAULT_REPORTED_CGPA,
    DIAGNOSTIC_SNIPPET_LENGTH,
    PAGE_SEPARATOR,
    UNKNOWN,
)

logger = logging.getLogger(__name__)


class TranscriptParseError(ValueError):
    """Transcript text did not match the expected layout"""

    def __init__(
        self,
        message: str,
        expected: Optional[List[str]] = None,
        found: Optional[List[str]] = None,
        snippet: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.expected = expected or []
        self.found = found or []
        self.snippet = snippet

    def __str__(self) -> str:
        lines = [self.message]
        if self.expected:
            lines.append(f"Expected: {', '.join(self.expected)}")
        lines.append(f"Found: {', '.join(self.found) if self.found else 'nothing recognizable'}")
        if self.snippet:
            lines.append("Raw text start:")
            lines.append(self.snippet)
        return "\n".join(lines)


def _spaced(word: str) -> str:
    """Pattern for a word whose letters may be split by whitespace"""
    return r"\s*".join(re.escape(ch) for ch in word)


# =============================================================================
# PATTERNS
# =============================================================================

# Identity labels in document order; each value runs to the next anchor
IDENTITY_LABELS: List[Tuple[str, str, str]] = [
    ("name", "Student Name:", r"Student\s*Name\s*:"),
    ("father_name", "Father's Name:", r"Father\s*['’`]?\s*s\s*Name\s*:"),
    ("student_no", "Student No:", r"Student\s*No\s*\.?\s*:"),
    ("reg_status", "Reg Status", r"Reg\s*Status\s*:?"),
    ("program", "Program:", r"Program\s*:"),
]

# Table heading that closes the identity block ("Course Code", split "Course Cod\ne")
IDENTITY_TERMINATOR_RE = re.compile(
    r"Course\s+(?:" + _spaced("Cod") + "|" + _spaced("Tit") + ")", re.IGNORECASE
)

FOOTER_CGPA_RE = re.compile(
    r"CUMULATIVE\s+GRADE\s+POINT\s+AVERAGE\s*\(\s*" + _spaced("CGPA") + r"\s*\)\s*[=:]?\s*"
    r"(?P<cgpa>\d?\.\d{2})",
    re.IGNORECASE,
)

SEASONS = ("Spring", "Summer", "Fall")

SEMESTER_HEADER_RE = re.compile(
    _spaced("Semester")
    + r"\s*(?P<number>\d+)\s*"
    + r"(?P<season>" + "|".join(_spaced(season) for season in SEASONS) + r")\s*"
    + _spaced("Semester")
    + r"\s*(?P<year>\d\s*\d\s*\d\s*\d)",
    re.IGNORECASE,
)

# Longest alternatives first so "A-" is never read as "A"
GRADE_PATTERN = r"A[-−]|A|B\+|B|C\+|C|D\+|D|F|W|I"

CODE_PATTERN = r"[A-Z]{2,8}-?\d{3,6}"

# A title never runs into the next course code, so a row with an
# unrecognized grade is dropped instead of absorbing the following row
COURSE_LINE_RE = re.compile(
    r"(?<![A-Za-z0-9])(?P<code>" + CODE_PATTERN + r")"
    r"\s+(?:(?P<title>(?:(?!" + CODE_PATTERN + r"\s).)+?)\s+)?"
    r"(?P<credits>\d+\.\d)"
    r"\s+(?P<grade>" + GRADE_PATTERN + r")(?!\S)"
    r"(?:\s+(?P<repeat>(?i:repeat))\b)?"
)

SGPA_RE = re.compile(_spaced("SGPA") + r"\s*[:\-]?\s*(?P<sgpa>\d?\.\d{2})", re.IGNORECASE)

HEADER_DESCRIPTION = "'Semester <n> <Spring|Summer|Fall> Semester <yyyy>' header"


# =============================================================================
# HELPERS
# =============================================================================

def clean(value: str) -> str:
    """Collapse whitespace runs (newlines included) to single spaces"""
    return " ".join(value.split())


def join_pages(pages: Sequence[str]) -> str:
    """Join per-page text in page order with a paragraph separator"""
    return PAGE_SEPARATOR.join(pages)


def _snippet(text: str, start: int = 0) -> str:
    return text[start:start + DIAGNOSTIC_SNIPPET_LENGTH]


def _find_identity_anchors(text: str) -> Dict[str, re.Match]:
    anchors = {}
    for field_name, _, pattern in IDENTITY_LABELS:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            anchors[field_name] = match
    return anchors


def _next_anchor_start(text: str, position: int, anchors: Dict[str, re.Match]) -> Optional[int]:
    """Start of the nearest known label, table heading or semester header after position"""
    candidates = [m.start() for m in anchors.values() if m.start() >= position]

    for pattern in (IDENTITY_TERMINATOR_RE, SEMESTER_HEADER_RE):
        match = pattern.search(text, position)
        if match:
            candidates.append(match.start())

    return min(candidates) if candidates else None


# =============================================================================
# STUDENT IDENTITY
# =============================================================================

def parse_footer_cgpa(text: str) -> str:
    """Self-reported cumulative GPA from the footer, two decimals"""
    match = FOOTER_CGPA_RE.search(text)
    if not match:
        return DEFAULT_REPORTED_CGPA
    return f"{float(match.group('cgpa')):.2f}"


def parse_student_identity(text: str) -> StudentIdentity:
    """
    Recover the student identity block

    Each field is located by its label and its value is everything up to the
    next known label, so values may contain arbitrary spacing and line breaks.

    Args:
        text: Full transcript text

    Returns:
        StudentIdentity with "Unknown" for every field that was not found
    """
    anchors = _find_identity_anchors(text)
    values = {}

    for field_name, label, _ in IDENTITY_LABELS:
        match = anchors.get(field_name)
        if match is None:
            logger.warning(f"  ⚠️ Label not found: {label}")
            continue

        end = _next_anchor_start(text, match.end(), anchors)
        if end is None:
            logger.warning(f"  ⚠️ No label follows {label} - value left unknown")
            continue

        value = clean(text[match.end():end])
        values[field_name] = value or UNKNOWN

    return StudentIdentity(cgpa=parse_footer_cgpa(text), **values)


# =============================================================================
# SEMESTERS
# =============================================================================

def find_semester_headers(text: str) -> List[re.Match]:
    """Every semester header in document order (non-overlapping)"""
    return list(SEMESTER_HEADER_RE.finditer(text))


def split_semester_blocks(text: str) -> List[str]:
    """Each header plus the text up to the next header (or end of text)"""
    headers = find_semester_headers(text)
    blocks = []
    for i, header in enumerate(headers):
        end = headers[i + 1].start() if i < len(headers) - 1 else len(text)
        blocks.append(text[header.start():end])
    return blocks


def parse_course_lines(block: str) -> List[Course]:
    """Every CODE TITLE CREDITS GRADE [Repeat] match in a semester block"""
    courses = []

    for match in COURSE_LINE_RE.finditer(block):
        credits = float(match.group("credits"))
        grade = match.group("grade")

        courses.append(
            Course(
                code=match.group("code"),
                title=clean(match.group("title") or ""),
                credits=credits,
                grade=grade,
                points=course_points(grade, credits),
                is_repeat=match.group("repeat") is not None,
            )
        )

    return courses


def parse_semester_block(block: str, index: int) -> Semester:
    """
    Parse one semester block

    Args:
        block: Header text followed by the semester's course table
        index: Position of the header in the document, used for the id

    Returns:
        Semester with courses and totals; the printed SGPA, when present,
        becomes the initial sgpa
    """
    header = SEMESTER_HEADER_RE.match(block)
    if header:
        number = int(header.group("number"))
        season = "".join(header.group("season").split()).title()
        year = int("".join(header.group("year").split()))
        name = f"Semester {number} - {season} {year}"
    else:
        number = season = year = None
        name = clean(block.split("\n", 1)[0]) or f"Semester {index + 1}"

    courses = parse_course_lines(block)

    semester = recompute_semester(
        Semester(
            id=f"sem-{index}",
            name=name,
            courses=courses,
            number=number,
            season=season,
            year=year,
        )
    )

    sgpa_match = SGPA_RE.search(block)
    if sgpa_match:
        reported = float(sgpa_match.group("sgpa"))
        semester = semester.model_copy(update={"sgpa": reported, "reported_sgpa": reported})

    return semester


# =============================================================================
# ENTRY POINTS
# =============================================================================

def parse_transcript(text: str) -> TranscriptRecord:
    """
    Parse transcript text into a TranscriptRecord

    Zero recognized semester headers is not an error here: the identity may
    still be usable. Use extract_transcript() for the end-to-end contract.
    """
    logger.info("🔍 PARSING TRANSCRIPT TEXT")

    student = parse_student_identity(text)
    missing = student.missing_fields()
    if missing:
        logger.warning(f"  ⚠️ Identity fields not recovered: {', '.join(missing)}")

    semesters = []
    for index, block in enumerate(split_semester_blocks(text)):
        semester = parse_semester_block(block, index)
        if not semester.courses:
            logger.warning(f"  ⚠️ {semester.name}: no course lines recognized - skipped")
            continue
        semesters.append(semester)

    logger.info(
        f"  ✅ Parsed {len(semesters)} semesters, "
        f"{sum(len(s.courses) for s in semesters)} courses for {student.name}"
    )

    return TranscriptRecord(student=student, semesters=semesters)


def extract_transcript(source: Union[str, Sequence[str]]) -> TranscriptRecord:
    """
    Parse one transcript document end to end

    Args:
        source: Full text, or per-page texts in page order

    Returns:
        TranscriptRecord with at least one semester

    Raises:
        TranscriptParseError: text is blank or no semester with courses was found
    """
    text = source if isinstance(source, str) else join_pages(source)
    expected = [label for _, label, _ in IDENTITY_LABELS] + [HEADER_DESCRIPTION]

    if not text.strip():
        raise TranscriptParseError("Transcript text is empty", expected=expected)

    record = parse_transcript(text)

    found = [
        label
        for field_name, label, _ in IDENTITY_LABELS
        if getattr(record.student, field_name) != UNKNOWN
    ]
    headers = find_semester_headers(text)
    found.append(f"{len(headers)} semester header(s)")

    if not headers:
        raise TranscriptParseError(
            "No semester headers found",
            expected=expected,
            found=found,
            snippet=_snippet(text),
        )

    if not record.semesters:
        raise TranscriptParseError(
            "Semester headers found but no course lines recognized",
            expected=["CODE TITLE CREDITS GRADE [Repeat] course lines"],
            found=found,
            snippet=_snippet(text, headers[0].start()),
        )

    return record
