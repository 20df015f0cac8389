"""Version rules: consistency across documents and lineage ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from metacheck.contract.artifacts import METADATA_FILES
from metacheck.rules.base import RuleSkipped, Violation
from metacheck.scan.metadata import scalar_text
from metacheck.versions import InvalidVersion, is_ambiguous_width, parse_version

if TYPE_CHECKING:
    from metacheck.rules.base import RuleInput
    from metacheck.versions import VersionSpec


def check_version_consistency(rule_input: RuleInput) -> list[Violation]:
    """All metadata documents and the latest changelog entry share one version."""
    artifact = rule_input.artifact
    expected = rule_input.artifact_version()
    violations: list[Violation] = []

    declared: list[tuple[str, str]] = []
    for kind in sorted(artifact.metadata_documents):
        text = scalar_text(artifact.metadata_documents[kind].get("version"))
        if text:
            declared.append((METADATA_FILES[kind], text))

    if artifact.changelog_entries and artifact.changelog_path is not None:
        latest = artifact.changelog_entries[0]
        declared.append((f"{artifact.changelog_path}:{latest.line}", latest.version))

    for location, text in declared:
        try:
            version = parse_version(text, width=rule_input.width)
        except InvalidVersion:
            violations.append(
                Violation(
                    kind="VersionMismatch",
                    location=location,
                    message=f"version '{text}' is not a valid version",
                )
            )
            continue
        if version != expected:
            violations.append(
                Violation(
                    kind="VersionMismatch",
                    location=location,
                    message=(
                        f"declares version '{text}', "
                        f"distribution version is '{artifact.version}'"
                    ),
                )
            )

    return violations


def _release_sequence(rule_input: RuleInput) -> list[tuple[str, VersionSpec]]:
    """Return the lineage plus the current version, oldest first."""
    if rule_input.lineage is None:
        msg = "no lineage supplied"
        raise RuleSkipped(msg)

    sequence = [
        (f"lineage[{index}]", version)
        for index, version in enumerate(rule_input.lineage)
    ]
    current = rule_input.artifact_version()
    if not sequence or sequence[-1][1] != current:
        sequence.append(("version", current))
    return sequence


def check_version_monotonic(rule_input: RuleInput) -> list[Violation]:
    """Lineage versions strictly increase under normalized comparison."""
    sequence = _release_sequence(rule_input)
    violations: list[Violation] = []
    for (_, previous), (location, current) in zip(sequence, sequence[1:]):
        if not previous < current:
            violations.append(
                Violation(
                    kind="VersionNotIncreasing",
                    location=location,
                    message=(
                        f"version '{current}' {current.parts} does not increase "
                        f"on '{previous}' {previous.parts}"
                    ),
                )
            )
    return violations


def check_version_width_stable(rule_input: RuleInput) -> list[Violation]:
    """No two consecutive releases mix decimal digit widths."""
    sequence = _release_sequence(rule_input)
    width = rule_input.width
    violations: list[Violation] = []
    for (_, previous), (location, current) in zip(sequence, sequence[1:]):
        if is_ambiguous_width(previous, current, width=width):
            violations.append(
                Violation(
                    kind="AmbiguousVersionWidth",
                    location=location,
                    message=(
                        f"'{previous}' has {previous.fraction_digits} fractional "
                        f"digits and '{current}' has {current.fraction_digits}; "
                        f"ordering depends on the {width}-digit grouping"
                    ),
                )
            )
    return violations


__all__ = [
    "check_version_consistency",
    "check_version_monotonic",
    "check_version_width_stable",
]
