"""
Tests for the quiz-toolkit command line
"""

import json

import pytest

from quiz_toolkit.cli import build_parser, main


class TestParser:
    """Tests for build_parser."""

    def test_parser_when_extract_then_defaults(self, tmp_path):
        """extract should default to smart-merge and JSON."""
        args = build_parser().parse_args(["extract", str(tmp_path / "a.txt")])
        assert args.strategy == "smart-merge"
        assert args.format == "json"
        assert args.output is None

    def test_parser_when_unknown_strategy_then_exit(self, tmp_path):
        """Unknown strategies should be rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["extract", "a.txt", "--strategy", "zip"])


class TestCommands:
    """Tests for main() subcommands."""

    def test_detect_when_mcq_file_then_json_report(self, tmp_path, capsys, mcq_text):
        """detect should print the detection report."""
        path = tmp_path / "week1.txt"
        path.write_text(mcq_text, encoding="utf-8")
        assert main(["detect", str(path)]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["detectedFormat"] == "mcq"
        assert report["statistics"]["optionLines"] == 8

    def test_extract_when_output_given_then_file_written(self, tmp_path, mcq_text, true_false_text):
        """extract should merge files and write the export."""
        first = tmp_path / "week1.txt"
        second = tmp_path / "week2.txt"
        first.write_text(mcq_text, encoding="utf-8")
        second.write_text(true_false_text, encoding="utf-8")
        output = tmp_path / "merged.json"

        assert main(["extract", str(first), str(second), "--strategy", "append", "--output", str(output)]) == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["metadata"]["title"] == "Merged Quiz (2 files)"
        assert len(data["questions"]) == 5
        assert data["questions"][0]["correctAnswer"] == "Paris"

    def test_extract_when_markdown_to_stdout_then_printed(self, tmp_path, capsys, mcq_text):
        """Without --output the export should go to stdout."""
        path = tmp_path / "week1.txt"
        path.write_text(mcq_text, encoding="utf-8")
        assert main(["extract", str(path), "--format", "markdown"]) == 0
        assert "## Question 2" in capsys.readouterr().out

    def test_extract_when_all_files_fail_then_exit_code_one(self, tmp_path):
        """A batch with no usable file should fail."""
        path = tmp_path / "slides.pptx"
        path.write_bytes(b"x")
        assert main(["extract", str(path)]) == 1

    def test_analyze_when_mcq_file_then_quality_report(self, tmp_path, capsys, mcq_text):
        """analyze should print analysis and validation."""
        path = tmp_path / "week1.txt"
        path.write_text(mcq_text, encoding="utf-8")
        assert main(["analyze", str(path)]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["file"] == "week1.txt"
        assert report["detectedFormat"] == "mcq"
        assert "analysis" in report and "validation" in report

    def test_detect_when_missing_file_then_exit_code_one(self, tmp_path):
        """Unreadable input should be reported, not raised."""
        assert main(["detect", str(tmp_path / "missing.txt")]) == 1
