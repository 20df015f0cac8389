"""The ordered rule catalog.

Catalog position fixes report order; rules themselves are independent.
"""

from __future__ import annotations

from metacheck.rules.base import Rule
from metacheck.rules.content import (
    check_changelog_format,
    check_description_present,
    check_license_placement,
    check_metadata_completeness,
    check_shebang_portability,
)
from metacheck.rules.dependencies import check_dependency_completeness
from metacheck.rules.layout import (
    check_archive_naming,
    check_manifest_consistency,
    check_no_junk_files,
    check_required_files,
)
from metacheck.rules.versions import (
    check_version_consistency,
    check_version_monotonic,
    check_version_width_stable,
)

CATALOG: tuple[Rule, ...] = (
    Rule(
        "VersionConsistency",
        check_version_consistency,
        "Metadata documents and latest changelog entry declare one version",
    ),
    Rule(
        "VersionMonotonic",
        check_version_monotonic,
        "Lineage versions strictly increase",
    ),
    Rule(
        "VersionWidthStable",
        check_version_width_stable,
        "Lineage does not mix decimal digit widths",
    ),
    Rule(
        "DescriptionPresent",
        check_description_present,
        "Documentation has a non-empty DESCRIPTION section",
    ),
    Rule(
        "ArchiveNaming",
        check_archive_naming,
        "Archive is Name-Version.<ext> and unpacks to Name-Version",
    ),
    Rule(
        "ChangelogFormat",
        check_changelog_format,
        "Changelog entries are known releases, newest first",
    ),
    Rule(
        "LicensePlacement",
        check_license_placement,
        "License declared in every required location",
    ),
    Rule(
        "ShebangPortability",
        check_shebang_portability,
        "Installable scripts use a direct interpreter shebang",
    ),
    Rule(
        "DependencyCompleteness",
        check_dependency_completeness,
        "Used modules are declared as prerequisites",
    ),
    Rule(
        "MetadataCompleteness",
        check_metadata_completeness,
        "Metadata documents carry the required fields",
    ),
    Rule(
        "RequiredFiles",
        check_required_files,
        "Required files are shipped",
    ),
    Rule(
        "ManifestConsistency",
        check_manifest_consistency,
        "MANIFEST lists exactly the shipped files",
    ),
    Rule(
        "NoJunkFiles",
        check_no_junk_files,
        "No build or VCS leftovers are shipped",
    ),
)

RULE_NAMES: tuple[str, ...] = tuple(rule.name for rule in CATALOG)

RULE_ORDER: dict[str, int] = {name: index for index, name in enumerate(RULE_NAMES)}


def enabled_rules(disabled: list[str] | None = None) -> tuple[Rule, ...]:
    skip = set(disabled or ())
    return tuple(rule for rule in CATALOG if rule.name not in skip)


__all__ = ["CATALOG", "RULE_NAMES", "RULE_ORDER", "enabled_rules"]
