"""Distribution layout contract.

Filenames, document kinds and license locations that the loader and the
rules agree on.
"""

from __future__ import annotations

from typing import Literal

# Report schema version for serialized conformance reports.
REPORT_SCHEMA_VERSION = 1

META_JSON = "META.json"
META_YML = "META.yml"
MANIFEST = "MANIFEST"
GITIGNORE = ".gitignore"

MetadataKind = Literal["json", "yaml"]

METADATA_FILES: dict[MetadataKind, str] = {
    "json": META_JSON,
    "yaml": META_YML,
}

LicenseLocation = Literal[
    "metadata-json",
    "metadata-yaml",
    "license-file",
    "documentation",
]

METADATA_LICENSE_LOCATIONS: dict[MetadataKind, LicenseLocation] = {
    "json": "metadata-json",
    "yaml": "metadata-yaml",
}

LICENSE_FILENAMES = ("LICENSE", "LICENCE", "COPYING")

# Documentation section titles that count as a license statement.
LICENSE_SECTION_TITLES = frozenset(
    {
        "LICENSE",
        "LICENCE",
        "COPYRIGHT",
        "COPYRIGHT AND LICENSE",
        "COPYRIGHT AND LICENCE",
        "COPYRIGHT & LICENSE",
        "LICENSE AND COPYRIGHT",
        "LICENCE AND COPYRIGHT",
    }
)

DESCRIPTION_SECTION_TITLE = "DESCRIPTION"

# License values that do not declare anything.
UNDECLARED_LICENSE_VALUES = frozenset({"", "unknown"})

# META.yml dependency sections (spec 1.4) in declaration order.
YAML_PREREQ_SECTIONS = (
    "requires",
    "build_requires",
    "configure_requires",
    "test_requires",
)

__all__ = [
    "DESCRIPTION_SECTION_TITLE",
    "GITIGNORE",
    "LICENSE_FILENAMES",
    "LICENSE_SECTION_TITLES",
    "MANIFEST",
    "METADATA_FILES",
    "METADATA_LICENSE_LOCATIONS",
    "META_JSON",
    "META_YML",
    "REPORT_SCHEMA_VERSION",
    "UNDECLARED_LICENSE_VALUES",
    "YAML_PREREQ_SECTIONS",
    "LicenseLocation",
    "MetadataKind",
]
