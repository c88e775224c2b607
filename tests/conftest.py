from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in (
        "SCAFFOLD_JSON",
        "SCAFFOLD_PLAIN_JSON",
        "SCAFFOLD_LOG_LEVEL",
        "FORCE_COLOR",
        "NO_COLOR",
        "TTY_COMPATIBLE",
        "TTY_INTERACTIVE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("scaffold_cli.runtime_core.load_dotenv", lambda *a, **k: False)
