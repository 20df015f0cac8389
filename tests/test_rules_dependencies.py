from __future__ import annotations

from typing import Any

import pytest

from metacheck.contract.models import DependencyUsage, DistributionArtifact
from metacheck.rules.base import RuleInput, RuleSkipped
from metacheck.rules.config import MetacheckConfig
from metacheck.rules.dependencies import check_dependency_completeness
from metacheck.scan.metadata import declared_prereqs


def _artifact(**documents: dict[str, Any]) -> DistributionArtifact:
    if not documents:
        documents = {
            "json": {
                "prereqs": {
                    "runtime": {"requires": {"JSON::PP": "2.27", "List::Util": "0"}},
                    "test": {"requires": {"Test::More": "0.98"}},
                }
            }
        }
    return DistributionArtifact(name="Foo-Bar", version="1.23", metadata_documents=documents)


def _usage(*entries: str) -> tuple[DependencyUsage, ...]:
    result = []
    for entry in entries:
        module, _, minimum = entry.partition(" ")
        result.append(DependencyUsage(module=module, minimum_version=minimum or None))
    return tuple(result)


def test_declared_usage_passes() -> None:
    rule_input = RuleInput(artifact=_artifact(), usage=_usage("JSON::PP", "Test::More 0.98"))

    assert check_dependency_completeness(rule_input) == []


def test_undeclared_module_reported() -> None:
    rule_input = RuleInput(artifact=_artifact(), usage=_usage("JSON::PP", "Try::Tiny 0.30"))

    violations = check_dependency_completeness(rule_input)

    assert [(v.kind, v.location) for v in violations] == [
        ("UndeclaredDependency", "Try::Tiny")
    ]
    assert "0.30" in violations[0].message


def test_unversioned_declaration_with_known_minimum_reported() -> None:
    rule_input = RuleInput(artifact=_artifact(), usage=_usage("List::Util 1.45"))

    violations = check_dependency_completeness(rule_input)

    assert [(v.kind, v.location) for v in violations] == [
        ("MissingMinimumVersion", "List::Util")
    ]


def test_own_namespace_and_pragmas_never_reported() -> None:
    rule_input = RuleInput(
        artifact=_artifact(),
        usage=_usage("Foo::Bar", "Foo::Bar::Util", "strict", "warnings", "perl 5.010"),
    )

    assert check_dependency_completeness(rule_input) == []


def test_sibling_namespace_is_not_own() -> None:
    rule_input = RuleInput(artifact=_artifact(), usage=_usage("Foo::Barn"))

    violations = check_dependency_completeness(rule_input)

    assert [v.location for v in violations] == ["Foo::Barn"]


def test_repeated_usage_reported_once() -> None:
    rule_input = RuleInput(artifact=_artifact(), usage=_usage("Moo", "Moo 2.0"))

    violations = check_dependency_completeness(rule_input)

    assert [v.location for v in violations] == ["Moo"]


def test_ignored_modules_configurable() -> None:
    config = MetacheckConfig(ignored_modules=["Moo"])
    rule_input = RuleInput(artifact=_artifact(), usage=_usage("Moo", "strict"), config=config)

    violations = check_dependency_completeness(rule_input)

    assert [v.location for v in violations] == ["strict"]


def test_yaml_only_prereqs_are_read() -> None:
    artifact = _artifact(
        yaml={
            "requires": {"JSON::PP": "2.27"},
            "build_requires": {"Test::More": "0.98"},
        }
    )
    rule_input = RuleInput(artifact=artifact, usage=_usage("JSON::PP 2.27", "Test::More"))

    assert check_dependency_completeness(rule_input) == []


def test_skipped_without_usage() -> None:
    with pytest.raises(RuleSkipped):
        check_dependency_completeness(RuleInput(artifact=_artifact()))


def test_versioned_declaration_wins_across_documents() -> None:
    documents = {
        "json": {"prereqs": {"runtime": {"requires": {"JSON::PP": "0"}}}},
        "yaml": {"requires": {"JSON::PP": "2.27"}},
    }

    assert declared_prereqs(documents) == {"JSON::PP": "2.27"}
