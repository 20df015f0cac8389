"""Stable model and layout surface shared by loader, rules and reporter."""

from metacheck.contract.artifacts import (
    LICENSE_FILENAMES,
    MANIFEST,
    META_JSON,
    META_YML,
    METADATA_FILES,
    REPORT_SCHEMA_VERSION,
    LicenseLocation,
    MetadataKind,
)


def __getattr__(name: str) -> object:
    if name in {"ChangelogEntry", "DependencyUsage", "DistributionArtifact"}:
        from metacheck.contract.models import (
            ChangelogEntry,
            DependencyUsage,
            DistributionArtifact,
        )

        return {
            "ChangelogEntry": ChangelogEntry,
            "DependencyUsage": DependencyUsage,
            "DistributionArtifact": DistributionArtifact,
        }[name]

    msg = f"module 'metacheck.contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "LICENSE_FILENAMES",
    "MANIFEST",
    "METADATA_FILES",
    "META_JSON",
    "META_YML",
    "REPORT_SCHEMA_VERSION",
    "ChangelogEntry",
    "DependencyUsage",
    "DistributionArtifact",
    "LicenseLocation",
    "MetadataKind",
]
