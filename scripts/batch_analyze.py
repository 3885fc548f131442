#!/usr/bin/env python3
"""
BATCH TRANSCRIPT ANALYZER
Parses every transcript in a folder and writes one summary row per file.

Usage: python3 scripts/batch_analyze.py <input_dir> [summary.csv]

Accepts .pdf files (text layer read with pdfplumber) and .txt text dumps.
A transcript that fails to parse is recorded with its error, not fatal.
"""

import sys
import logging
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gpa_calculator import academic_standing, calculate_ledger
from pdf_text import read_transcript_text
from transcript_parser import TranscriptParseError, extract_transcript

TRANSCRIPT_SUFFIXES = {".pdf", ".txt"}


@dataclass
class AnalysisResult:
    file_name: str
    student_no: Optional[str]
    student_name: Optional[str]
    semesters: int
    cgpa: Optional[str]
    reported_cgpa: Optional[str]
    credits_attempted: float
    credits_earned: float
    standing: Optional[str]
    success: bool
    error: Optional[str]


def find_transcripts(input_dir: Path) -> List[Path]:
    """Transcript files in the folder, sorted by name."""
    return sorted(
        path for path in input_dir.iterdir()
        if path.is_file() and path.suffix.lower() in TRANSCRIPT_SUFFIXES
    )


def analyze_file(path: Path) -> AnalysisResult:
    """Parse one transcript and compute its cumulative ledger."""
    try:
        record = extract_transcript(read_transcript_text(path))
    except Exception as e:
        # Unreadable PDFs and undecodable dumps fail the file, not the run
        return AnalysisResult(
            file_name=path.name,
            student_no=None,
            student_name=None,
            semesters=0,
            cgpa=None,
            reported_cgpa=None,
            credits_attempted=0.0,
            credits_earned=0.0,
            standing=None,
            success=False,
            error=e.message if isinstance(e, TranscriptParseError) else str(e) or type(e).__name__,
        )

    summary = calculate_ledger(record.semesters).summary
    return AnalysisResult(
        file_name=path.name,
        student_no=record.student.student_no,
        student_name=record.student.name,
        semesters=len(record.semesters),
        cgpa=summary.cgpa,
        reported_cgpa=record.student.cgpa,
        credits_attempted=summary.total_credits,
        credits_earned=summary.total_earned_credits,
        standing=academic_standing(summary.cgpa),
        success=True,
        error=None,
    )


def analyze_all(paths: List[Path], progress: bool = True) -> List[AnalysisResult]:
    # Per-file parse chatter drowns the progress bar
    logging.getLogger("transcript_parser").setLevel(logging.ERROR)
    logging.getLogger("pdf_text").setLevel(logging.ERROR)

    results = []
    iterator = tqdm(paths, desc="Analyzing", unit="transcript") if progress else paths

    for path in iterator:
        result = analyze_file(path)
        if not result.success and progress:
            tqdm.write(f"  ❌ Failed {path.name}: {result.error[:50]}")
        results.append(result)

    return results


def print_summary(results: List[AnalysisResult]):
    """Print analysis summary."""
    success = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    print("\n" + "=" * 70)
    print("BATCH ANALYSIS SUMMARY")
    print("=" * 70)

    print(f"\n✅ Parsed: {len(success)}")
    print(f"❌ Failed: {len(failed)}")

    mismatched = [
        r for r in success
        if r.reported_cgpa not in (None, "0.00") and r.reported_cgpa != r.cgpa
    ]
    if mismatched:
        print(f"\n⚠️  {len(mismatched)} transcripts whose footer CGPA differs from the computed CGPA:")
        for r in mismatched:
            print(f"  {r.file_name}: computed {r.cgpa}, footer {r.reported_cgpa}")

    if failed:
        print("\n❌ FAILED TRANSCRIPTS:")
        print("-" * 50)
        for r in failed:
            print(f"  {r.file_name}: {r.error}")

    print("=" * 70)


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 scripts/batch_analyze.py <input_dir> [summary.csv]")
        return 1

    logging.basicConfig(level=logging.INFO)

    input_dir = Path(sys.argv[1]).expanduser()
    output_path = Path(sys.argv[2]).expanduser() if len(sys.argv) > 2 else None

    if not input_dir.is_dir():
        print(f"❌ Not a directory: {input_dir}")
        return 1

    paths = find_transcripts(input_dir)
    print(f"📂 Found {len(paths)} transcripts in {input_dir}")
    if not paths:
        return 1

    results = analyze_all(paths, progress=True)
    print_summary(results)

    if output_path:
        pd.DataFrame([asdict(r) for r in results]).to_csv(output_path, index=False)
        print(f"\n📁 Summary: {output_path}")

    return 0 if all(r.success for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
