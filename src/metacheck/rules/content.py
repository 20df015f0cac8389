"""Content rules: documentation, changelog, licensing, scripts, metadata fields."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from metacheck.contract.artifacts import DESCRIPTION_SECTION_TITLE, METADATA_FILES
from metacheck.rules.base import RuleSkipped, Violation
from metacheck.utils import is_blank, lookup_dotted
from metacheck.versions import InvalidVersion, parse_version

if TYPE_CHECKING:
    from metacheck.rules.base import RuleInput
    from metacheck.versions import VersionSpec

_SHEBANG_RE = re.compile(r"^#!\s*(?P<path>\S+)(?P<args>(?:\s+\S+)*)\s*$")


def check_description_present(rule_input: RuleInput) -> list[Violation]:
    documentation = rule_input.artifact.documentation
    for sections in documentation.values():
        if sections.get(DESCRIPTION_SECTION_TITLE, "").strip():
            return []

    if not documentation:
        return [
            Violation(
                kind="MissingDescription",
                location="documentation",
                message="no documentation files found",
            )
        ]
    return [
        Violation(
            kind="MissingDescription",
            location=", ".join(sorted(documentation)),
            message=f"no non-empty {DESCRIPTION_SECTION_TITLE} section",
        )
    ]


def check_changelog_format(rule_input: RuleInput) -> list[Violation]:
    """Entries are newest first, name real releases and carry parseable dates."""
    artifact = rule_input.artifact
    if artifact.changelog_path is None:
        msg = "no changelog file"
        raise RuleSkipped(msg)

    changelog = artifact.changelog_path
    if not artifact.changelog_entries:
        return [
            Violation(
                kind="ChangelogEmpty",
                location=changelog,
                message="changelog has no release entries",
            )
        ]

    known: set[VersionSpec] | None = None
    if rule_input.lineage is not None:
        known = set(rule_input.lineage)
        known.add(rule_input.artifact_version())

    violations: list[Violation] = []
    previous: VersionSpec | None = None
    for entry in artifact.changelog_entries:
        location = f"{changelog}:{entry.line}"

        if entry.released is None:
            detail = (
                "has no release timestamp"
                if entry.timestamp is None
                else f"timestamp '{entry.timestamp}' is not an ISO date or date-time"
            )
            violations.append(
                Violation(
                    kind="ChangelogBadTimestamp",
                    location=location,
                    message=f"entry '{entry.version}' {detail}",
                )
            )

        try:
            version = parse_version(entry.version, width=rule_input.width)
        except InvalidVersion:
            violations.append(
                Violation(
                    kind="ChangelogVersionUnknown",
                    location=location,
                    message=f"entry version '{entry.version}' is not a valid version",
                )
            )
            continue

        if known is not None and version not in known:
            violations.append(
                Violation(
                    kind="ChangelogVersionUnknown",
                    location=location,
                    message=f"entry version '{entry.version}' is not a known release",
                )
            )

        if previous is not None and not previous > version:
            violations.append(
                Violation(
                    kind="ChangelogOutOfOrder",
                    location=location,
                    message=(
                        f"entry '{entry.version}' follows '{previous}' "
                        "but is not older"
                    ),
                )
            )
        previous = version

    return violations


def check_license_placement(rule_input: RuleInput) -> list[Violation]:
    declared = rule_input.artifact.license_declarations
    missing = sorted(set(rule_input.config.required_license_locations) - declared)
    found = ", ".join(sorted(declared)) or "nowhere"
    return [
        Violation(
            kind="MissingLicenseDeclaration",
            location=location,
            message=f"license is not declared in {location} (declared in: {found})",
        )
        for location in missing
    ]


def _shebang_problem(line: str, interpreter: str) -> str | None:
    match = _SHEBANG_RE.match(line)
    if match is None:
        return "has no shebang line"

    path = match.group("path")
    name = PurePosixPath(path).name
    if name == "env":
        return f"uses env-style indirection '{line}'"
    if not re.fullmatch(rf"{re.escape(interpreter)}[\d.]*", name):
        return f"does not name {interpreter} in '{line}'"
    if "/" in path and not path.startswith("/"):
        return f"uses a relative interpreter path in '{line}'"
    return None


def check_shebang_portability(rule_input: RuleInput) -> list[Violation]:
    shebangs = rule_input.artifact.shebang_lines
    if not shebangs:
        msg = "no installable scripts"
        raise RuleSkipped(msg)

    interpreter = rule_input.config.interpreter
    violations: list[Violation] = []
    for script, line in shebangs.items():
        problem = _shebang_problem(line, interpreter)
        if problem is not None:
            violations.append(
                Violation(
                    kind="NonPortableShebang",
                    location=script,
                    message=f"script {problem}",
                )
            )
    return violations


def check_metadata_completeness(rule_input: RuleInput) -> list[Violation]:
    documents = rule_input.artifact.metadata_documents
    violations: list[Violation] = []
    for kind in sorted(documents):
        filename = METADATA_FILES[kind]
        for field in rule_input.config.required_metadata_fields:
            if is_blank(lookup_dotted(documents[kind], field)):
                violations.append(
                    Violation(
                        kind="MissingMetadataField",
                        location=f"{filename}:{field}",
                        message=f"{filename} does not declare '{field}'",
                    )
                )
    return violations


__all__ = [
    "check_changelog_format",
    "check_description_present",
    "check_license_placement",
    "check_metadata_completeness",
    "check_shebang_portability",
]
