"""Tests for the command line interface."""

import json

import pytest

from drilleval import cli


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    """Keep the CLI from reconfiguring root logging during tests."""
    calls = []
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: calls.append(level))
    return calls


def _output(capsys):
    return json.loads(capsys.readouterr().out)


class TestCompareCommand:
    """Test the compare subcommand."""

    def test_correct(self, capsys):
        """Test exit status and payload for a correct answer."""
        assert cli.main(["compare", "هَذَا", "هذا"]) == 0
        payload = _output(capsys)
        assert payload["correct"] is True
        assert payload["policy"] == "lenient"

    def test_strict_incorrect(self, capsys):
        """Test that a strict mismatch exits 1 with a classification."""
        assert cli.main(["compare", "--strict", "هَذَا", "هذا"]) == 1
        payload = _output(capsys)
        assert payload["error_type"] == "tashkeel_missing"
        assert "diff" in payload


class TestDiffCommand:
    """Test the diff subcommand."""

    def test_diff(self, capsys):
        """Test the diff payload."""
        assert cli.main(["diff", "كتاب", "كتب"]) == 0
        payload = _output(capsys)
        assert payload["distance"] == 1
        assert [entry["op"] for entry in payload["entries"]] == ["match", "match", "delete", "match"]
        assert payload["expected"][2] == {"char": "ا", "type": "missing"}


class TestHintCommand:
    """Test the hint subcommand."""

    def test_hint(self, capsys):
        """Test a second-attempt hint."""
        assert cli.main(["hint", "كِتَاب", "--attempt", "2", "--max-attempts", "3"]) == 0
        payload = _output(capsys)
        assert payload["hint_text"] == "كِ..."
        assert payload["level"] == 2

    def test_invalid_max_attempts(self, capsys):
        """Test that a bad attempt limit is reported with exit status 2."""
        assert cli.main(["hint", "كتاب", "--attempt", "1", "--max-attempts", "1"]) == 2
        assert "Error:" in capsys.readouterr().err


def test_log_level_passed_to_setup(_no_logging_setup, capsys):
    """Test that --log-level reaches the logging setup."""
    cli.main(["--log-level", "DEBUG", "diff", "a", "a"])
    assert _no_logging_setup == ["DEBUG"]


def test_subcommand_required():
    """Test that a subcommand is mandatory."""
    with pytest.raises(SystemExit):
        cli.main([])
