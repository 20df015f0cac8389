"""Version values for distribution metadata."""

from metacheck.versions.spec import (
    DEFAULT_GROUP_WIDTH,
    InvalidVersion,
    VersionSpec,
    is_ambiguous_width,
    parse_version,
)

__all__ = [
    "DEFAULT_GROUP_WIDTH",
    "InvalidVersion",
    "VersionSpec",
    "is_ambiguous_width",
    "parse_version",
]
