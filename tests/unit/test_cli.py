"""Tests for the CLI."""
import pytest
from typer.testing import CliRunner

from cloudpub.cli.main import app, parse_context

runner = CliRunner()


class TestParseContext:
    """Test suite for parse_context."""

    def test_pairs(self):
        assert parse_context(["alt=cat", "caption=a=b"]) == {"alt": "cat", "caption": "a=b"}

    def test_empty(self):
        assert parse_context(None) is None

    def test_invalid(self):
        import typer

        with pytest.raises(typer.BadParameter):
            parse_context(["novalue"])


class TestCommands:
    """Test suite for CLI commands."""

    def test_plan(self, temp_file):
        result = runner.invoke(app, ["plan", str(temp_file), "--chunk-size", "100"])

        assert result.exit_code == 0
        assert "bytes 200-249/250" in result.output

    def test_form(self, temp_file):
        result = runner.invoke(app, [
            "form", str(temp_file), "--preset", "unsigned",
            "--tag", "a", "--tag", "b", "--context", "alt=cat",
        ])

        assert result.exit_code == 0
        assert "upload_preset" in result.output
        assert "a,b" in result.output
        assert "alt=cat" in result.output

    def test_form_needs_one_origin(self):
        result = runner.invoke(app, ["form", "--preset", "unsigned"])

        assert result.exit_code == 1
