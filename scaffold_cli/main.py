from __future__ import annotations

import sys

import click
import typer

from .cli_shared import (
    SCAFFOLD_JSON,
    SCAFFOLD_PLAIN_JSON,
    GlobalOpts,
    OpError,
    UsageError,
)
from .info_commands import cmd_info
from .metadata import load_package_metadata
from .runtime_core import (
    _apply_global_env,
    _bootstrap_env,
    _configure_logging,
    _namespace,
    _report_usage_error,
    _rich_error,
    _usage_help,
)

PROG_NAME = "scaffold"

app = typer.Typer(
    name=PROG_NAME,
    help="Project scaffold CLI.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {load_package_metadata().version}")
        raise typer.Exit(code=0)


def _ctx_global(ctx: typer.Context) -> GlobalOpts:
    if isinstance(ctx.obj, dict) and isinstance(ctx.obj.get("g"), GlobalOpts):
        return ctx.obj["g"]
    ns = _namespace(json_output=False, plain_json=False, quiet=False, verbose=False, no_color=False)
    return _apply_global_env(ns)


@app.callback()
def app_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help=f"Emit JSON output (env override: {SCAFFOLD_JSON})",
    ),
    plain_json: bool = typer.Option(
        False,
        "--plain-json",
        help=f"Emit compact JSON output (env override: {SCAFFOLD_PLAIN_JSON})",
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Reduce stderr logging"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging on stderr"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable styled text output"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
) -> None:
    del version
    ns = _namespace(
        json_output=json_output,
        plain_json=plain_json,
        quiet=quiet,
        verbose=verbose,
        no_color=no_color,
    )
    g = _apply_global_env(ns)
    _configure_logging(g)
    ctx.obj = {"g": g}


@app.command("info", help="Print package metadata. Use 'info --json' or the global --json for JSON.")
def info(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output (same as the global --json)"),
) -> None:
    g = _ctx_global(ctx)
    meta = load_package_metadata()
    cmd_info(meta, json_output=json_output or g.json_output, g=g)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        argv = ["--help"]
    try:
        _bootstrap_env()
        result = app(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except typer.Exit as e:
        return int(e.exit_code)
    except click.UsageError as e:
        command = typer.main.get_command(app)
        _report_usage_error(e.format_message(), help_text=_usage_help(command, e.ctx, prog_name=PROG_NAME))
        return int(e.exit_code)
    except click.ClickException as e:
        _rich_error(e.format_message())
        return int(e.exit_code)
    except UsageError as e:
        command = typer.main.get_command(app)
        _report_usage_error(str(e), help_text=_usage_help(command, None, prog_name=PROG_NAME))
        return 2
    except OpError as e:
        _rich_error(str(e))
        return 1
    return 0 if result is None else int(result)


if __name__ == "__main__":
    raise SystemExit(main())
