#!/usr/bin/env python3
"""
Simple wrapper to analyze one transcript
Usage: python3 analyze_transcript.py <transcript.pdf|transcript.txt> [report.csv]
"""

import sys
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from gpa_calculator import academic_standing, calculate_ledger, raw_attempted_credits
from ledger_report import build_semester_table, save_ledger_report
from pdf_text import read_transcript_text
from transcript_parser import TranscriptParseError, extract_transcript


def main(argv):
    logging.basicConfig(level=logging.INFO)

    if len(argv) < 2:
        print("ERROR: Missing arguments")
        print("Usage: python3 analyze_transcript.py <transcript.pdf|transcript.txt> [report.csv]")
        return 1

    source = Path(argv[1]).expanduser()
    report_path = Path(argv[2]).expanduser() if len(argv) > 2 else None

    if not source.exists():
        print(f"ERROR: {source} not found")
        return 1

    print(f"Reading {source.name}...")

    try:
        record = extract_transcript(read_transcript_text(source))
    except TranscriptParseError as e:
        print("\n❌ Parsing Failed")
        print(str(e))
        return 2
    except Exception as e:
        print("\n❌ Parsing Failed")
        print(f"Could not read {source.name}: {type(e).__name__}: {e}")
        return 2

    student = record.student
    print(f"\n🎓 {student.name}")
    print(f"  Father's Name: {student.father_name}")
    print(f"  Student No:    {student.student_no}")
    print(f"  Program:       {student.program}")
    print(f"  Reg Status:    {student.reg_status}")

    ledger = calculate_ledger(record.semesters)
    summary = ledger.summary

    print(f"\n📊 Semester Ledger:")
    print(build_semester_table(ledger.semesters).to_string(index=False))

    print(f"\n🎯 Cumulative:")
    print(f"  CGPA:              {summary.cgpa}")
    print(f"  Standing:          {academic_standing(summary.cgpa)}")
    print(f"  Credits Attempted: {summary.total_credits:.1f}")
    print(f"  Credits Earned:    {summary.total_earned_credits:.1f}")
    print(f"  Transcript Total:  {raw_attempted_credits(ledger.semesters):.1f} (retakes included)")

    if student.cgpa != "0.00" and student.cgpa != summary.cgpa:
        print(f"  ⚠️ Transcript footer reports CGPA {student.cgpa}")

    if report_path:
        save_ledger_report(record, report_path)
        print(f"\n✅ Report saved to: {report_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
