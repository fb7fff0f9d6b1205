from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from . import __version__
from .aggregate import (
    EmptyResultError,
    average_length,
    count_length3,
    count_words,
    frequency_map,
    group_by_length,
    longest_word,
    unique_sorted,
)
from .config import WordStreamConfig, load_optional_config
from .ranked import DEFAULT_TOP, index_of, search_file
from .report import build_report, iter_answers
from .words import words_from_file


app = typer.Typer(
    help="wordstream — word statistics for plain-text files",
    rich_markup_mode="rich",
    add_completion=False,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
USAGE_HINT = "Please input file path, e.g. /home/user/stream/wiki.xml"


def configure_logging(level: str) -> None:
    lvl = str(level or "INFO").strip().upper()
    if lvl not in LOG_LEVELS:
        raise typer.BadParameter(f"--log-level must be one of: {'|'.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=getattr(logging, lvl),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wordstream {__version__}")
        raise typer.Exit()


@app.callback()
def _global_options(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Optional config.toml path (defaults to ./config.toml when present)",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version and exit",
    ),
):
    configure_logging(log_level)
    cfg = load_optional_config(config)
    ctx.obj = {"config": cfg}


def _config(ctx: typer.Context) -> WordStreamConfig | None:
    if isinstance(getattr(ctx, "obj", None), dict):
        return ctx.obj.get("config")
    return None


def _encoding(ctx: typer.Context) -> str | None:
    cfg = _config(ctx)
    if cfg is None:
        return None
    enc = cfg.get("input", "encoding")
    return enc if isinstance(enc, str) else None


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def report(
    ctx: typer.Context,
    paths: Optional[List[Path]] = typer.Argument(None, dir_okay=False, help="Text file to analyse"),
    word: str = typer.Option("the", "--word", help="Word to count occurrences of"),
    length: int = typer.Option(4, "--length", help="Word length to count unique words of"),
    target: str = typer.Option("science", "--target", help="String to search for"),
    top: int = typer.Option(DEFAULT_TOP, "--top", help="Top-N search results to print"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON report to stdout"),
    no_header: bool = typer.Option(False, "--no-header", help="Only print the answers"),
):
    """Answer every word-statistics question about a file."""
    # Exactly one file; anything else is a usage hint, not a failure.
    if not paths or len(paths) != 1:
        typer.echo(USAGE_HINT)
        return
    path = paths[0]

    cfg = _config(ctx)
    if cfg is not None:
        cfg_word = cfg.get("report", "word")
        if isinstance(cfg_word, str) and word == "the":
            word = cfg_word

        cfg_length = cfg.get("report", "length")
        if isinstance(cfg_length, int) and int(length) == 4:
            length = int(cfg_length)

        cfg_target = cfg.get("report", "target")
        if isinstance(cfg_target, str) and target == "science":
            target = cfg_target

        cfg_top = cfg.get("report", "top")
        if isinstance(cfg_top, int) and int(top) == DEFAULT_TOP:
            top = int(cfg_top)

        cfg_json = cfg.get("report", "json")
        if isinstance(cfg_json, bool) and bool(json_output) is False:
            json_output = bool(cfg_json)

    if int(top) < 0:
        raise typer.BadParameter("--top must be >= 0")
    if int(length) < 1:
        raise typer.BadParameter("--length must be >= 1")

    opts = dict(word=word, length=int(length), target=target, top=int(top), encoding=_encoding(ctx))

    if bool(json_output):
        try:
            payload = build_report(path, **opts)
        except (EmptyResultError, ZeroDivisionError) as e:
            _fail(e)
        typer.echo(json.dumps(payload, ensure_ascii=False))
        return

    console = Console()
    if not no_header:
        console.print(Panel("Computing word statistics…", title="wordstream", border_style="cyan"))

    try:
        for i, answer in enumerate(iter_answers(path, **opts), start=1):
            if not no_header:
                console.print(f"Q{i}. {answer.question}", markup=False, soft_wrap=True)
            for ln in answer.render():
                typer.echo(ln)
    except (EmptyResultError, ZeroDivisionError) as e:
        _fail(e)


@app.command()
def count(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to analyse"),
):
    """Print the number of words."""
    typer.echo(f"{count_words(words_from_file(path, encoding=_encoding(ctx))):,}")


@app.command()
def unique(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to analyse"),
    show: bool = typer.Option(False, "--list", help="Print the words, reverse-sorted"),
):
    """Print the number of distinct words."""
    try:
        words = unique_sorted(words_from_file(path, encoding=_encoding(ctx)))
    except EmptyResultError as e:
        _fail(e)
    if show:
        for w in words:
            typer.echo(w)
        return
    typer.echo(f"{len(words):,}")


@app.command()
def longest(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to analyse"),
):
    """Print the longest word (first one wins a tie)."""
    try:
        typer.echo(longest_word(words_from_file(path, encoding=_encoding(ctx))))
    except EmptyResultError as e:
        _fail(e)


@app.command()
def three(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to analyse"),
):
    """Print the number of three-character words."""
    typer.echo(f"{count_length3(words_from_file(path, encoding=_encoding(ctx))):,}")


@app.command()
def average(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to analyse"),
):
    """Print the average word length."""
    try:
        typer.echo(f"{average_length(words_from_file(path, encoding=_encoding(ctx))):.2f}")
    except ZeroDivisionError as e:
        _fail(e)


@app.command()
def freq(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to analyse"),
    word: str = typer.Argument(..., help="Word to look up (case-sensitive)"),
):
    """Print how many times a word occurs."""
    typer.echo(f"{frequency_map(words_from_file(path, encoding=_encoding(ctx)))[word]:,}")


@app.command()
def lengths(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to analyse"),
    length: int = typer.Argument(..., help="Word length"),
    show: bool = typer.Option(False, "--list", help="Print the words, sorted"),
):
    """Print the number of distinct words of a given length."""
    group = group_by_length(words_from_file(path, encoding=_encoding(ctx))).get(int(length), frozenset())
    if show:
        for w in sorted(group):
            typer.echo(w)
        return
    typer.echo(f"{len(group):,}")


@app.command()
def search(
    ctx: typer.Context,
    path: Path = typer.Argument(..., dir_okay=False, help="Text file to search"),
    target: str = typer.Argument(..., help="String to search for (case-sensitive)"),
    top: int = typer.Option(DEFAULT_TOP, "--top", help="Top-N results to print"),
):
    """Rank words by the index of TARGET inside them, highest first."""
    if int(top) < 0:
        raise typer.BadParameter("--top must be >= 0")
    search_file(index_of, path, target, limit=int(top), encoding=_encoding(ctx))


def main() -> None:
    app()


def _run(subcommand: str) -> None:
    # Console scripts that behave like `wordstream <subcommand> ...`.
    app(args=[subcommand, *sys.argv[1:]], prog_name=Path(sys.argv[0]).name)


def report_main() -> None:
    _run("report")


def search_main() -> None:
    _run("search")


if __name__ == "__main__":
    main()
