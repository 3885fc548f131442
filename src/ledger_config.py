"""
Configuration constants for the transcript ledger.

Sentinels, manual-entry defaults and policy thresholds used by the parser,
the GPA calculator and the semester editor live here so they can be
adjusted in one place when the transcript format or grading policy changes.
"""

# =============================================================================
# PARSING
# =============================================================================

# Value stored for any identity field the parser could not recover.
UNKNOWN = "Unknown"

# Footer CGPA when the transcript does not print one.
DEFAULT_REPORTED_CGPA = "0.00"

# Separator placed between page texts when a document arrives page by page.
PAGE_SEPARATOR = "\n\n"

# Characters of raw text included in a parse failure diagnostic.
DIAGNOSTIC_SNIPPET_LENGTH = 3000


# =============================================================================
# GRADING POLICY
# =============================================================================

# CGPA at or above this keeps the student in good standing.
PROBATION_THRESHOLD = 2.0

STANDING_GOOD = "GOOD"
STANDING_PROBATION = "PROBATION"


# =============================================================================
# EDITING / MANUAL ENTRY
# =============================================================================

# Placeholder course added by "add course" and new semesters
DEFAULT_COURSE_CREDITS = 3.0
DEFAULT_COURSE_GRADE = "C"
NEW_COURSE_PREFIX = "NEW"

FUTURE_SEMESTER_PREFIX = "future-sem"

MANUAL_ENTRY_STUDENT_NO = "MANUAL-ENTRY"
MANUAL_ENTRY_NAME = "Guest User"
MANUAL_ENTRY_PROGRAM = "B.Sc Software Engineering"
MANUAL_ENTRY_REG_STATUS = "Active"
