from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.text import Text

from .cli_shared import GlobalOpts, _print_json
from .metadata import PackageMetadata

log = logging.getLogger(__name__)


def info_fields(meta: PackageMetadata) -> list[tuple[str, str]]:
    """Return ``(label, value)`` pairs for the text rendering, skipping empty fields."""
    out = [
        ("", meta.description),
        ("License", meta.license),
        ("Repository", meta.repository),
        ("Homepage", meta.homepage),
    ]
    return [(label, value) for label, value in out if value]


def info_text(meta: PackageMetadata) -> str:
    lines = [f"{meta.name} {meta.version}"]
    lines += [f"{label}: {value}" if label else value for label, value in info_fields(meta)]
    return "\n".join(lines) + "\n"


def info_lines(meta: PackageMetadata) -> list[Text]:
    lines = [Text.assemble((meta.name, "bold"), " ", (meta.version, "green"))]
    for label, value in info_fields(meta):
        if not label:
            lines.append(Text(value))
        elif label == "License":
            lines.append(Text.assemble((label, "dim"), ": ", value))
        else:
            lines.append(Text.assemble((label, "dim"), ": ", (value, "cyan")))
    return lines


def _stdout_console(g: GlobalOpts) -> Console:
    return Console(no_color=g.no_color, highlight=False, emoji=False)


def cmd_info(meta: PackageMetadata, *, json_output: bool, g: GlobalOpts) -> int:
    """Print package metadata as text, or as JSON when ``json_output`` is set.

    Raises ``SerializationError`` if the JSON payload cannot be encoded.
    """
    log.debug("executing info command json_output=%s", json_output)
    if json_output:
        _print_json(meta.to_payload(), pretty=g.pretty)
        return 0
    console = _stdout_console(g)
    if console.color_system is None or console.no_color:
        # Unstyled output is written verbatim; Rich expands tabs and drops control codes.
        sys.stdout.write(info_text(meta))
        return 0
    console.print(Text("\n").join(info_lines(meta)), soft_wrap=True)
    return 0
