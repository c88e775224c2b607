from __future__ import annotations

from email.message import Message
from importlib.metadata import PackageNotFoundError

import pytest

from scaffold_cli import __version__
from scaffold_cli.cli_shared import OpError
from scaffold_cli.metadata import PackageMetadata, load_package_metadata, metadata_from_headers


def _headers(**fields: object) -> Message:
    msg = Message()
    for name, value in fields.items():
        header = name.replace("_", "-")
        values = value if isinstance(value, list) else [value]
        for v in values:
            msg[header] = v
    return msg


def test_payload_omits_empty_optionals_and_keeps_order() -> None:
    meta = PackageMetadata(
        name="demo",
        version="1.0.0",
        description="",
        repository="https://git.example.com/demo",
        homepage="",
        license="MIT",
    )
    assert list(meta.to_payload().items()) == [
        ("name", "demo"),
        ("version", "1.0.0"),
        ("repository", "https://git.example.com/demo"),
        ("license", "MIT"),
    ]


@pytest.mark.parametrize("field", ["name", "version"])
def test_blank_required_fields_are_rejected(field: str) -> None:
    values = {"name": "demo", "version": "1.0.0", field: "  "}
    with pytest.raises(OpError, match=f"missing {field}"):
        PackageMetadata(**values)


def test_metadata_is_immutable() -> None:
    meta = PackageMetadata(name="demo", version="1.0.0")
    with pytest.raises(AttributeError):
        meta.name = "other"  # type: ignore[misc]


def test_headers_map_to_record() -> None:
    md = _headers(
        Name="demo",
        Version="1.0.0",
        Summary="Demo project",
        License_Expression="Apache-2.0",
        Project_URL=[
            "Documentation, https://docs.example.com",
            "Source Code, https://git.example.com/demo",
            "Home-Page, https://demo.example.com",
        ],
    )
    assert metadata_from_headers(md) == PackageMetadata(
        name="demo",
        version="1.0.0",
        description="Demo project",
        repository="https://git.example.com/demo",
        homepage="https://demo.example.com",
        license="Apache-2.0",
    )


def test_repository_prefers_repository_label_over_source() -> None:
    md = _headers(
        Name="demo",
        Version="1.0.0",
        Project_URL=[
            "Source, https://mirror.example.com/demo",
            "Repository, https://git.example.com/demo",
        ],
    )
    assert metadata_from_headers(md).repository == "https://git.example.com/demo"


def test_homepage_falls_back_to_legacy_header() -> None:
    md = _headers(Name="demo", Version="1.0.0", Home_page="https://demo.example.com")
    assert metadata_from_headers(md).homepage == "https://demo.example.com"


def test_license_falls_back_to_first_line_then_classifier() -> None:
    text = _headers(Name="demo", Version="1.0.0", License="BSD-3-Clause\n\nRedistribution and use ...")
    assert metadata_from_headers(text).license == "BSD-3-Clause"

    classified = _headers(
        Name="demo",
        Version="1.0.0",
        Classifier=[
            "Programming Language :: Python :: 3",
            "License :: OSI Approved :: MIT License",
        ],
    )
    assert metadata_from_headers(classified).license == "MIT License"


def test_unknown_placeholders_are_treated_as_absent() -> None:
    md = _headers(Name="demo", Version="1.0.0", Summary="UNKNOWN", Home_page="UNKNOWN", License="UNKNOWN")
    assert metadata_from_headers(md).to_payload() == {"name": "demo", "version": "1.0.0"}


def test_missing_name_in_headers_is_an_error() -> None:
    with pytest.raises(OpError):
        metadata_from_headers(_headers(Version="1.0.0"))


def test_load_reads_installed_distribution(monkeypatch) -> None:
    seen: list[str] = []

    def _fake(dist_name: str) -> Message:
        seen.append(dist_name)
        return _headers(Name="scaffold-cli", Version="9.9.9", Summary="Scaffold")

    monkeypatch.setattr("scaffold_cli.metadata._dist_metadata", _fake)
    meta = load_package_metadata()
    assert seen == ["scaffold-cli"]
    assert meta.to_payload() == {"name": "scaffold-cli", "version": "9.9.9", "description": "Scaffold"}


def test_load_falls_back_when_not_installed(monkeypatch) -> None:
    def _missing(dist_name: str) -> Message:
        raise PackageNotFoundError(dist_name)

    monkeypatch.setattr("scaffold_cli.metadata._dist_metadata", _missing)
    assert load_package_metadata("demo") == PackageMetadata(name="demo", version=__version__)
