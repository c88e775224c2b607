from __future__ import annotations

import argparse
import contextlib
import io
import logging
import os
from typing import Any

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .cli_shared import (
    LOG_LEVELS,
    SCAFFOLD_JSON,
    SCAFFOLD_LOG_LEVEL,
    SCAFFOLD_PLAIN_JSON,
    GlobalOpts,
    UsageError,
    _env_or_none,
    _eprint,
    _truthy,
)

_ERROR_CONSOLE = Console(stderr=True)

_LOGGER_NAME = "scaffold_cli"


def _bootstrap_env() -> None:
    # Use python-dotenv package defaults: discover and load .env without
    # overriding already-exported process environment values.
    load_dotenv()


def _namespace(**kwargs: Any) -> argparse.Namespace:
    return argparse.Namespace(**kwargs)


def _log_level(*, quiet: bool, verbose: bool) -> str:
    if quiet:
        return "ERROR"
    if verbose:
        return "DEBUG"
    raw = _env_or_none(SCAFFOLD_LOG_LEVEL)
    if raw is None:
        return "WARNING"
    level = raw.upper()
    if level not in LOG_LEVELS:
        raise UsageError(
            f"invalid {SCAFFOLD_LOG_LEVEL} {raw!r} (expected one of: {', '.join(LOG_LEVELS)})"
        )
    return level


def _apply_global_env(ns: argparse.Namespace) -> GlobalOpts:
    quiet = bool(getattr(ns, "quiet", False))
    verbose = bool(getattr(ns, "verbose", False))
    plain_json = bool(getattr(ns, "plain_json", False)) or _truthy(os.environ.get(SCAFFOLD_PLAIN_JSON))
    return GlobalOpts(
        json_output=bool(getattr(ns, "json_output", False)) or _truthy(os.environ.get(SCAFFOLD_JSON)),
        pretty=not plain_json,
        quiet=quiet,
        verbose=verbose,
        no_color=bool(getattr(ns, "no_color", False)),
        log_level=_log_level(quiet=quiet, verbose=verbose),
    )


def _configure_logging(g: GlobalOpts) -> logging.Logger:
    handler = RichHandler(
        console=Console(stderr=True, no_color=g.no_color),
        show_time=False,
        show_path=False,
    )
    logger = logging.getLogger(_LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(g.log_level)
    logger.propagate = False
    return logger


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {escape(msg)}", markup=True, highlight=False, soft_wrap=True)


def _usage_help(command: click.Command, ctx: click.Context | None, *, prog_name: str) -> str:
    if ctx is None:
        ctx = click.Context(command, info_name=prog_name)
    buf = io.StringIO()
    # Typer's Rich formatter prints help to stdout instead of returning it.
    with contextlib.redirect_stdout(buf):
        text = ctx.get_help()
    return (text or buf.getvalue()).strip()


def _report_usage_error(message: str, *, help_text: str) -> None:
    _rich_error(message)
    if help_text:
        _eprint("")
        _eprint(help_text)
