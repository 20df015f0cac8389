"""Metadata document parsing.

Documents are kept as open mappings: unknown keys are preserved so newer
metadata spec versions never break loading.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import orjson
import yaml

from metacheck.contract.artifacts import (
    UNDECLARED_LICENSE_VALUES,
    YAML_PREREQ_SECTIONS,
    MetadataKind,
)
from metacheck.scan.errors import LoadError, LoadErrorKind


def parse_metadata(kind: MetadataKind, path: str, raw: bytes) -> dict[str, Any]:
    """Parse a metadata document into a mapping.

    YAML is read with ``BaseLoader`` so every scalar stays a string; a
    version such as ``1.20`` must not be read back as the float ``1.2``.

    Raises:
        LoadError: UnparsableMetadata on syntax errors or a non-mapping
            top level.
    """
    try:
        if kind == "json":
            data = orjson.loads(raw)
        else:
            data = yaml.load(raw.decode("utf-8"), Loader=yaml.BaseLoader)  # noqa: S506
    except (orjson.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise LoadError(LoadErrorKind.UNPARSABLE_METADATA, path, str(exc)) from exc

    if not isinstance(data, dict):
        raise LoadError(
            LoadErrorKind.UNPARSABLE_METADATA,
            path,
            f"expected a mapping at the top level, got {type(data).__name__}",
        )
    return data


def scalar_text(value: Any) -> str | None:
    """Render a scalar metadata value as text, None for missing or non-scalars."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value).strip()


def declares_license(document: Mapping[str, Any]) -> bool:
    """Return True when a document carries a real license value."""
    value = document.get("license")
    values = value if isinstance(value, list) else [value]
    texts = [scalar_text(item) for item in values]
    return any(
        text is not None and text.lower() not in UNDECLARED_LICENSE_VALUES
        for text in texts
    )


def _merge_requirements(
    declared: dict[str, str], requirements: Any
) -> None:
    if not isinstance(requirements, Mapping):
        return
    for module, version in requirements.items():
        text = scalar_text(version) or "0"
        existing = declared.get(str(module))
        if existing is None or existing in {"", "0"}:
            declared[str(module)] = text


def declared_prereqs(documents: Mapping[MetadataKind, Mapping[str, Any]]) -> dict[str, str]:
    """Collect declared dependencies across all metadata documents.

    Returns a module -> minimum version mapping; ``"0"`` means any version.
    A versioned declaration wins over an unversioned one.
    """
    declared: dict[str, str] = {}

    json_doc = documents.get("json")
    if json_doc is not None:
        prereqs = json_doc.get("prereqs")
        if isinstance(prereqs, Mapping):
            for phase in sorted(prereqs):
                relations = prereqs[phase]
                if isinstance(relations, Mapping):
                    _merge_requirements(declared, relations.get("requires"))

    yaml_doc = documents.get("yaml")
    if yaml_doc is not None:
        for section in YAML_PREREQ_SECTIONS:
            _merge_requirements(declared, yaml_doc.get(section))

    return declared


__all__ = [
    "declared_prereqs",
    "declares_license",
    "parse_metadata",
    "scalar_text",
]
