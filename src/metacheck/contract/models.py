"""Distribution models produced by the loader and consumed by the rules.

Records are frozen; a model is built once per run and never mutated.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from metacheck.contract.artifacts import LicenseLocation, MetadataKind


class ChangelogEntry(BaseModel):
    """One release record from the changelog."""

    model_config = ConfigDict(frozen=True)

    version: str
    timestamp: str | None = None
    released: datetime | date | None = None
    items: tuple[str, ...] = ()
    line: int = Field(default=1, ge=1)


class DependencyUsage(BaseModel):
    """A module the distribution is known to use."""

    model_config = ConfigDict(frozen=True)

    module: str
    minimum_version: str | None = None


class DistributionArtifact(BaseModel):
    """One versioned release of a module, as found on disk."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    files: tuple[str, ...] = ()
    metadata_documents: dict[MetadataKind, dict[str, Any]] = Field(
        default_factory=dict,
        description="Parsed metadata documents keyed by kind; unknown keys kept",
    )
    changelog_path: str | None = None
    changelog_entries: tuple[ChangelogEntry, ...] = ()
    license_declarations: frozenset[LicenseLocation] = frozenset()
    shebang_lines: dict[str, str] = Field(
        default_factory=dict,
        description="Installable script path -> first line",
    )
    documentation: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Documentation path -> section title -> section body",
    )
    manifest: tuple[str, ...] | None = None
    archive_name: str | None = None
    unpack_roots: tuple[str, ...] = ()
    ignored_files: tuple[str, ...] = ()


__all__ = ["ChangelogEntry", "DependencyUsage", "DistributionArtifact"]
