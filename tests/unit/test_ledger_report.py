"""
Unit Tests for Ledger Report tables and transcript text loading
"""

import pandas as pd

from ledger_report import (
    COURSE_COLUMNS,
    SEMESTER_COLUMNS,
    build_course_table,
    build_semester_table,
    save_ledger_report,
)
from pdf_text import read_transcript_text
from semester_editor import start_manual_session
from transcript_parser import parse_transcript


class TestSemesterTable:

    def test_rows_in_document_order(self, sample_semesters):
        df = build_semester_table(sample_semesters)

        assert list(df.columns) == SEMESTER_COLUMNS
        assert df["Semester ID"].tolist() == ["sem-0", "sem-1", "sem-2"]
        assert df["Cumulative CGPA"].tolist() == ["2.86", "3.20", "2.92"]
        assert df["Cumulative Credits"].tolist() == [7.0, 10.0, 13.0]
        assert df["SGPA"].tolist() == [2.86, 4.0, 2.0]

    def test_empty(self):
        df = build_semester_table([])

        assert df.empty
        assert list(df.columns) == SEMESTER_COLUMNS


class TestCourseTable:

    def test_retake_winner_marked(self, sample_semesters):
        df = build_course_table(sample_semesters)

        assert list(df.columns) == COURSE_COLUMNS
        assert len(df) == 6

        math = df[df["Title"] == "Calculus I"]
        assert math["Counts Toward CGPA"].tolist() == [False, True]
        assert math["Repeat"].tolist() == [False, True]

    def test_withdrawal_not_counted(self, sample_semesters):
        df = build_course_table(sample_semesters)

        withdrawn = df[df["Grade"] == "W"]
        assert withdrawn["Counts Toward CGPA"].tolist() == [False]


class TestSaveReport:

    def test_csv_written(self, sample_transcript_text, tmp_path):
        record = parse_transcript(sample_transcript_text)
        output_path = tmp_path / "ledger.csv"

        df = save_ledger_report(record, output_path)

        assert output_path.exists()
        saved = pd.read_csv(output_path)
        assert len(saved) == len(df) == 2
        assert saved["Semester"].tolist() == ["Semester 1 - Fall 2022", "Semester 2 - Spring 2023"]

    def test_no_path_returns_table_only(self, tmp_path):
        df = save_ledger_report(start_manual_session())

        assert len(df) == 1
        assert list(tmp_path.iterdir()) == []


class TestReadTranscriptText:

    def test_plain_text_dump(self, sample_transcript_text, tmp_path):
        path = tmp_path / "transcript.txt"
        path.write_text(sample_transcript_text, encoding="utf-8")

        assert read_transcript_text(path) == sample_transcript_text
