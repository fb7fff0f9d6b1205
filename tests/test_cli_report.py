from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

import wordstream.cli as cli


def _corpus(tmp_path: Path) -> Path:
    p = tmp_path / "wiki.txt"
    p.write_text(
        "the science of the 1989 neuroscience lab\nThe cat sat on the mat.\n",
        encoding="utf-8",
    )
    return p


def test_cli_report_without_path_prints_usage() -> None:
    runner = CliRunner()

    res = runner.invoke(cli.app, ["report"])
    assert res.exit_code == 0
    assert "Please input file path" in res.output


def test_cli_report_extra_argument_prints_usage(tmp_path: Path) -> None:
    runner = CliRunner()

    p = _corpus(tmp_path)
    res = runner.invoke(cli.app, ["report", str(p), "extra"])
    assert res.exit_code == 0
    assert "Please input file path" in res.output
    assert "Q1." not in res.output


def test_cli_report_prints_answers(tmp_path: Path) -> None:
    runner = CliRunner()

    p = _corpus(tmp_path)
    res = runner.invoke(cli.app, ["--log-level", "WARNING", "report", str(p), "--no-header"])
    assert res.exit_code == 0
    lines = res.output.splitlines()
    assert lines[:7] == ["12", "10", "neuroscience", "7", "4.00", "3", "1"]
    assert lines[7] == "5:<neuroscience>"
    assert "Q1." not in res.output


def test_cli_report_header_labels(tmp_path: Path) -> None:
    runner = CliRunner()

    p = _corpus(tmp_path)
    res = runner.invoke(cli.app, ["--log-level", "WARNING", "report", str(p)])
    assert res.exit_code == 0
    assert "Computing word statistics" in res.output
    assert "Q1. How many words are in the file?" in res.output
    assert 'searching for the word "science"' in res.output


def test_cli_report_logs_count_timing(tmp_path: Path) -> None:
    runner = CliRunner()

    p = _corpus(tmp_path)
    res = runner.invoke(cli.app, ["report", str(p), "--no-header"])
    assert res.exit_code == 0
    assert "Count words took" in res.output


def test_cli_report_json(tmp_path: Path) -> None:
    runner = CliRunner()

    p = _corpus(tmp_path)
    res = runner.invoke(cli.app, ["--log-level", "WARNING", "report", str(p), "--json", "--word", "cat"])
    assert res.exit_code == 0
    payload = json.loads(res.output)
    assert payload["word_count"] == 12
    assert payload["word_occurrences"] == 1
    assert payload["search"][0] == {"score": 5, "text": "neuroscience"}


def test_cli_report_no_words_is_an_error_after_count(tmp_path: Path) -> None:
    runner = CliRunner()

    p = tmp_path / "empty.txt"
    p.write_text("a b c.\n", encoding="utf-8")
    res = runner.invoke(cli.app, ["--log-level", "WARNING", "report", str(p), "--no-header"])
    assert res.exit_code == 1
    assert res.output.splitlines()[0] == "0"
    assert "Error: No unique words found in the file." in res.output


def test_cli_report_missing_file_is_soft_then_empty_error(tmp_path: Path) -> None:
    runner = CliRunner()

    res = runner.invoke(cli.app, ["--log-level", "ERROR", "report", str(tmp_path / "nope.txt"), "--no-header"])
    assert res.exit_code == 1
    assert "Failed to read" in res.output
    assert "Error: No unique words found" in res.output


def test_cli_report_uses_config_defaults(tmp_path: Path) -> None:
    runner = CliRunner()

    p = _corpus(tmp_path)
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text(
        """
[input]
encoding = "utf-8"

[report]
word = "cat"
length = 12
target = "neuro"
top = 1
json = true
""".lstrip(),
        encoding="utf-8",
    )

    res = runner.invoke(cli.app, ["--config", str(cfg_path), "--log-level", "WARNING", "report", str(p)])
    assert res.exit_code == 0
    payload = json.loads(res.output)
    assert payload["word_occurrences"] == 1
    assert payload["length_group_size"] == 1
    assert payload["search"] == [{"score": 0, "text": "neuroscience"}]
