"""
Unit Tests for the batch analyzer and the single-file CLI

Tests for:
- One summary row per transcript, in file-name order
- Unreadable PDFs and undecodable text dumps are recorded, not fatal
- The CLI reports an unreadable file as a parse failure
"""

import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT / "scripts"))
sys.path.insert(0, str(ROOT))

import analyze_transcript
from batch_analyze import analyze_all, analyze_file, find_transcripts


def write_folder(folder, good_text):
    (folder / "a_good.txt").write_text(good_text, encoding="utf-8")
    (folder / "b_bad.txt").write_bytes(b"\xff\xfe\xfa not utf-8")
    (folder / "c_bad.pdf").write_bytes(b"not a pdf")
    (folder / "notes.md").write_text("ignored", encoding="utf-8")


class TestAnalyzeAll:

    def test_only_transcripts_found(self, sample_transcript_text, tmp_path):
        write_folder(tmp_path, sample_transcript_text)

        paths = find_transcripts(tmp_path)

        assert [p.name for p in paths] == ["a_good.txt", "b_bad.txt", "c_bad.pdf"]

    def test_unreadable_files_do_not_stop_the_run(self, sample_transcript_text, tmp_path):
        write_folder(tmp_path, sample_transcript_text)

        results = analyze_all(find_transcripts(tmp_path), progress=False)

        assert [r.success for r in results] == [True, False, False]
        assert results[0].cgpa == "3.70"
        assert results[0].reported_cgpa == "3.31"
        assert results[0].semesters == 2
        for failed in results[1:]:
            assert failed.error
            assert failed.cgpa is None
            assert failed.semesters == 0

    def test_parse_failure_recorded(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("no semesters in here", encoding="utf-8")

        result = analyze_file(path)

        assert not result.success
        assert "No semester headers found" in result.error


class TestAnalyzeTranscriptCli:

    def test_success(self, sample_transcript_text, tmp_path, capsys):
        path = tmp_path / "transcript.txt"
        path.write_text(sample_transcript_text, encoding="utf-8")

        assert analyze_transcript.main(["analyze_transcript.py", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Ayesha Khan" in out
        assert "3.70" in out

    def test_undecodable_text_is_a_parse_failure(self, tmp_path, capsys):
        path = tmp_path / "transcript.txt"
        path.write_bytes(b"\xff\xfe\xfa not utf-8")

        assert analyze_transcript.main(["analyze_transcript.py", str(path)]) == 2
        assert "Parsing Failed" in capsys.readouterr().out

    def test_corrupt_pdf_is_a_parse_failure(self, tmp_path, capsys):
        path = tmp_path / "transcript.pdf"
        path.write_bytes(b"not a pdf")

        assert analyze_transcript.main(["analyze_transcript.py", str(path)]) == 2
        assert "Parsing Failed" in capsys.readouterr().out

    def test_missing_arguments(self, capsys):
        assert analyze_transcript.main(["analyze_transcript.py"]) == 1
