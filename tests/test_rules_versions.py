from __future__ import annotations

from typing import Any

import pytest

from metacheck.contract.models import ChangelogEntry, DistributionArtifact
from metacheck.rules.base import RuleInput, RuleSkipped
from metacheck.rules.config import MetacheckConfig
from metacheck.rules.versions import (
    check_version_consistency,
    check_version_monotonic,
    check_version_width_stable,
)
from metacheck.versions import parse_version


def _artifact(version: str = "1.23", **overrides: Any) -> DistributionArtifact:
    data: dict[str, Any] = {
        "name": "Foo-Bar",
        "version": version,
        "metadata_documents": {
            "json": {"name": "Foo-Bar", "version": version},
            "yaml": {"name": "Foo-Bar", "version": version},
        },
        "changelog_path": "Changes",
        "changelog_entries": (ChangelogEntry(version=version, line=3),),
    }
    data.update(overrides)
    return DistributionArtifact(**data)


def _lineage(*versions: str) -> tuple[Any, ...]:
    return tuple(parse_version(v) for v in versions)


def test_consistent_versions_pass() -> None:
    assert check_version_consistency(RuleInput(artifact=_artifact())) == []


def test_yaml_version_mismatch_reported() -> None:
    artifact = _artifact(
        metadata_documents={
            "json": {"version": "1.23"},
            "yaml": {"version": "1.22"},
        }
    )

    violations = check_version_consistency(RuleInput(artifact=artifact))

    assert [(v.kind, v.location) for v in violations] == [
        ("VersionMismatch", "META.yml")
    ]


def test_latest_changelog_entry_mismatch_reported() -> None:
    artifact = _artifact(
        changelog_entries=(
            ChangelogEntry(version="1.22", line=3),
            ChangelogEntry(version="1.21", line=7),
        )
    )

    violations = check_version_consistency(RuleInput(artifact=artifact))

    assert [(v.kind, v.location) for v in violations] == [
        ("VersionMismatch", "Changes:3")
    ]


def test_equivalent_spellings_are_consistent() -> None:
    artifact = _artifact(
        version="1.2",
        metadata_documents={"json": {"version": "1.2"}, "yaml": {"version": "1.200"}},
        changelog_entries=(ChangelogEntry(version="v1.200.0", line=1),),
    )

    assert check_version_consistency(RuleInput(artifact=artifact)) == []


def test_unparsable_declared_version_reported() -> None:
    artifact = _artifact(
        metadata_documents={"json": {"version": "1.23"}, "yaml": {"version": "soon"}}
    )

    violations = check_version_consistency(RuleInput(artifact=artifact))

    assert len(violations) == 1
    assert "not a valid version" in violations[0].message


def test_monotonic_skipped_without_lineage() -> None:
    with pytest.raises(RuleSkipped):
        check_version_monotonic(RuleInput(artifact=_artifact()))


def test_monotonic_lineage_passes() -> None:
    rule_input = RuleInput(artifact=_artifact(), lineage=_lineage("1.1901", "1.20", "1.22"))

    assert check_version_monotonic(rule_input) == []


def test_current_version_not_duplicated_when_last_in_lineage() -> None:
    rule_input = RuleInput(artifact=_artifact(), lineage=_lineage("1.22", "1.23"))

    assert check_version_monotonic(rule_input) == []


def test_decreasing_lineage_reported() -> None:
    rule_input = RuleInput(artifact=_artifact("1.30"), lineage=_lineage("1.20", "1.19"))

    violations = check_version_monotonic(rule_input)

    assert [(v.kind, v.location) for v in violations] == [
        ("VersionNotIncreasing", "lineage[1]")
    ]


def test_current_version_older_than_lineage_reported() -> None:
    rule_input = RuleInput(artifact=_artifact("1.10"), lineage=_lineage("1.20"))

    violations = check_version_monotonic(rule_input)

    assert [(v.kind, v.location) for v in violations] == [
        ("VersionNotIncreasing", "version")
    ]


def test_repeated_version_is_not_increasing() -> None:
    rule_input = RuleInput(artifact=_artifact(), lineage=_lineage("1.20", "1.200", "1.23"))

    violations = check_version_monotonic(rule_input)

    assert [v.location for v in violations] == ["lineage[1]"]


def test_width_stable_flags_mixed_widths() -> None:
    rule_input = RuleInput(artifact=_artifact("1.21"), lineage=_lineage("1.190", "1.20"))

    violations = check_version_width_stable(rule_input)

    assert [(v.kind, v.location) for v in violations] == [
        ("AmbiguousVersionWidth", "lineage[1]")
    ]


def test_width_stable_passes_for_uniform_widths() -> None:
    rule_input = RuleInput(artifact=_artifact(), lineage=_lineage("1.20", "1.21", "1.22"))

    assert check_version_width_stable(rule_input) == []


def test_width_stable_uses_configured_group_width() -> None:
    config = MetacheckConfig(version_group_width=1)
    rule_input = RuleInput(
        artifact=_artifact("1.21"),
        lineage=_lineage("1.190", "1.20"),
        config=config,
    )

    assert check_version_width_stable(rule_input) == []


def test_width_stable_skipped_without_lineage() -> None:
    with pytest.raises(RuleSkipped):
        check_version_width_stable(RuleInput(artifact=_artifact()))
