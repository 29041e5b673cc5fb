"""
Command-line interface tests.

Tests for punydecode.main using typer's CliRunner.
"""

import json

import yaml
from typer.testing import CliRunner

from punydecode.main import app

runner = CliRunner()


class TestDecodeCommand:
    """Tests for the decode command."""

    def test_decodes_label(self):
        result = runner.invoke(app, ["decode", "mnchen-3ya"])

        assert result.exit_code == 0
        assert "mnchen-3ya -> münchen" in result.output

    def test_multiple_labels(self):
        result = runner.invoke(app, ["decode", "bcher-kva", "the cat sat on the mat"])

        assert result.exit_code == 0
        assert "bücher" in result.output
        assert "the cat sat on the mat -> the cat sat on the mat" in result.output

    def test_code_points(self):
        result = runner.invoke(app, ["decode", "-c", "bcher-kva"])

        assert result.exit_code == 0
        assert "U+0062 U+00FC U+0063 U+0068 U+0065 U+0072" in result.output

    def test_bad_label_fails(self):
        """A failing label is reported and sets the exit code."""
        result = runner.invoke(app, ["decode", "bcher-kva", "abc-!"])

        assert result.exit_code == 1
        assert "bücher" in result.output
        assert "abc-!: bad_input at position 4" in result.output

    def test_overflow_reported(self):
        result = runner.invoke(app, ["decode", "a-" + "9" * 20])

        assert result.exit_code == 1
        assert "overflow" in result.output


class TestExplainCommand:
    """Tests for the explain command."""

    def test_lists_insertions(self):
        result = runner.invoke(app, ["explain", "bcher-kva"])

        assert result.exit_code == 0
        assert "Literal prefix: 'bcher'" in result.output
        assert "U+00FC 'ü' at 1 (bias 0, 3 digit(s))" in result.output
        assert "Result: bücher" in result.output

    def test_no_delimiter(self):
        result = runner.invoke(app, ["explain", "plain"])

        assert result.exit_code == 0
        assert "No delimiter" in result.output
        assert "Result: plain" in result.output

    def test_error_position(self):
        result = runner.invoke(app, ["explain", "abc-kv"])

        assert result.exit_code == 1
        assert "bad_input at position 6" in result.output

    def test_non_ascii_label(self):
        result = runner.invoke(app, ["explain", "m\u00fcnchen-3ya"])

        assert result.exit_code == 1
        assert "bad_input at position 1" in result.output

    def test_code_point_not_text(self):
        """Insertions are listed, then the non-scalar result is rejected."""
        result = runner.invoke(app, ["explain", "--", "-ww902716a"])

        assert result.exit_code == 1
        assert "U+FFFFFFFF '?' at 0" in result.output
        assert "-ww902716a: bad_input: U+FFFFFFFF is not a Unicode scalar value" in result.output
        assert "Result:" not in result.output


class TestDecodeFileCommand:
    """Tests for the decode-file command."""

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["decode-file", str(tmp_path / "missing.txt")])

        assert result.exit_code == 1
        assert "Labels file not found" in result.output

    def test_empty_file(self, tmp_path):
        path = tmp_path / "labels.txt"
        path.write_text("\n\n", encoding="utf8")

        result = runner.invoke(app, ["decode-file", str(path), "--no-progress"])

        assert result.exit_code == 0
        assert "No labels found." in result.output

    def test_echoes_results(self, tmp_path):
        path = tmp_path / "labels.txt"
        path.write_text("bcher-kva\nabc-!\n", encoding="utf8")

        result = runner.invoke(app, ["decode-file", str(path), "--no-progress"])

        assert result.exit_code == 0
        assert "bcher-kva -> bücher" in result.output
        assert "Decoded 1 labels (failed 1)" in result.output
        assert "bad_input at position 4" in result.output

    def test_json_output(self, tmp_path):
        path = tmp_path / "labels.txt"
        path.write_text("mnchen-3ya\n", encoding="utf8")
        output = tmp_path / "out.json"

        result = runner.invoke(
            app, ["decode-file", str(path), "-o", str(output), "--no-progress"]
        )

        assert result.exit_code == 0
        with open(output, encoding="utf8") as f:
            assert json.load(f)[0]["text"] == "münchen"

    def test_json_output_keeps_position(self, tmp_path):
        path = tmp_path / "labels.txt"
        path.write_text("abc-kv\n", encoding="utf8")
        output = tmp_path / "out.json"

        result = runner.invoke(
            app, ["decode-file", str(path), "-o", str(output), "--no-progress"]
        )

        assert result.exit_code == 0
        with open(output, encoding="utf8") as f:
            data = json.load(f)
        assert data[0]["error"] == "bad_input"
        assert data[0]["position"] == 6

    def test_yaml_output(self, tmp_path):
        path = tmp_path / "labels.txt"
        path.write_text("mnchen-3ya\n", encoding="utf8")
        output = tmp_path / "out.yaml"

        result = runner.invoke(
            app, ["decode-file", str(path), "-o", str(output), "--no-progress"]
        )

        assert result.exit_code == 0
        with open(output, encoding="utf8") as f:
            assert yaml.safe_load(f)[0]["text"] == "münchen"

    def test_invalid_format(self, tmp_path):
        path = tmp_path / "labels.txt"
        path.write_text("abc\n", encoding="utf8")

        result = runner.invoke(app, ["decode-file", str(path), "-f", "csv"])

        assert result.exit_code == 1
        assert "Invalid format 'csv'" in result.output
