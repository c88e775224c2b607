"""Package metadata record reported by the ``info`` command.

Values come from the installed distribution's core metadata, which the packaging
toolchain writes at build time from ``pyproject.toml``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from email.message import Message
from importlib.metadata import PackageNotFoundError
from importlib.metadata import metadata as _dist_metadata
from typing import Any, cast

from . import __version__
from .cli_shared import OpError

log = logging.getLogger(__name__)

DIST_NAME = "scaffold-cli"

_REPOSITORY_LABELS = ("repository", "source", "sourcecode", "code")
_HOMEPAGE_LABELS = ("homepage", "home")


@dataclass(frozen=True)
class PackageMetadata:
    name: str
    version: str
    description: str = ""
    repository: str = ""
    homepage: str = ""
    license: str = ""

    def __post_init__(self) -> None:
        for field_name in ("name", "version"):
            if not str(getattr(self, field_name) or "").strip():
                raise OpError(f"package metadata missing {field_name}")

    def to_payload(self) -> dict[str, Any]:
        """Return the record as an ordered dict without empty optional fields."""
        return {k: v for k, v in asdict(self).items() if v != ""}


def _normalize_label(label: str) -> str:
    return "".join(c for c in label.lower() if c.isalnum())


def _project_urls(md: Message) -> dict[str, str]:
    out: dict[str, str] = {}
    for raw in md.get_all("Project-URL") or []:
        label, sep, url = str(raw).partition(",")
        if not sep:
            continue
        key = _normalize_label(label)
        url = url.strip()
        if key and url and key not in out:
            out[key] = url
    return out


def _first_url(urls: dict[str, str], labels: tuple[str, ...]) -> str:
    for label in labels:
        if label in urls:
            return urls[label]
    return ""


def _header(md: Message, name: str) -> str:
    return str(md.get(name) or "").strip()


def _license_from(md: Message) -> str:
    expr = _header(md, "License-Expression")
    if expr:
        return expr
    # Older backends put the whole license text here.
    text = _header(md, "License")
    if text and text.upper() != "UNKNOWN":
        return text.splitlines()[0].strip()
    for classifier in md.get_all("Classifier") or []:
        parts = [p.strip() for p in str(classifier).split("::")]
        if len(parts) >= 2 and parts[0] == "License":
            return parts[-1]
    return ""


def metadata_from_headers(md: Message) -> PackageMetadata:
    urls = _project_urls(md)
    homepage = _first_url(urls, _HOMEPAGE_LABELS) or _header(md, "Home-page")
    if homepage.upper() == "UNKNOWN":
        homepage = ""
    summary = _header(md, "Summary")
    if summary.upper() == "UNKNOWN":
        summary = ""
    return PackageMetadata(
        name=_header(md, "Name"),
        version=_header(md, "Version"),
        description=summary,
        repository=_first_url(urls, _REPOSITORY_LABELS),
        homepage=homepage,
        license=_license_from(md),
    )


def load_package_metadata(dist_name: str = DIST_NAME) -> PackageMetadata:
    try:
        md = cast(Message, _dist_metadata(dist_name))
    except PackageNotFoundError:
        log.debug("distribution %s not installed; using source tree version", dist_name)
        return PackageMetadata(name=dist_name, version=__version__)
    return metadata_from_headers(md)
