from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from typing import Any


class ScaffoldError(Exception):
    pass


class UsageError(ScaffoldError):
    pass


class OpError(ScaffoldError):
    pass


class SerializationError(OpError):
    pass


SCAFFOLD_JSON = "SCAFFOLD_JSON"
SCAFFOLD_PLAIN_JSON = "SCAFFOLD_PLAIN_JSON"
SCAFFOLD_LOG_LEVEL = "SCAFFOLD_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


@dataclass(frozen=True)
class GlobalOpts:
    json_output: bool
    pretty: bool
    quiet: bool
    verbose: bool = False
    no_color: bool = False
    log_level: str = "WARNING"


def _truthy(raw: str | None) -> bool:
    return str(raw or "").strip().lower() in {"1", "true", "yes", "on"}


def _env_or_none(*names: str) -> str | None:
    for n in names:
        v = (os.environ.get(n) or "").strip()
        if v:
            return v
    return None


def _dump_json(obj: Any, *, pretty: bool) -> str:
    try:
        if pretty:
            return json.dumps(obj, indent=2, ensure_ascii=False)
        return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to encode JSON output: {e}") from e


def _print_json(obj: Any, *, pretty: bool) -> None:
    # Encode fully before writing so a failure leaves stdout untouched.
    text = _dump_json(obj, pretty=pretty)
    sys.stdout.write(text + "\n")
