"""Dependency declaration rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from metacheck.rules.base import RuleSkipped, Violation
from metacheck.scan.metadata import declared_prereqs
from metacheck.utils import dist_to_namespace, in_namespace

if TYPE_CHECKING:
    from metacheck.rules.base import RuleInput


def check_dependency_completeness(rule_input: RuleInput) -> list[Violation]:
    """Every used module is declared, with a minimum version when one is known.

    Modules inside the distribution's own namespace and configured pragmas
    are never reported.
    """
    if rule_input.usage is None:
        msg = "no dependency usage list supplied"
        raise RuleSkipped(msg)

    artifact = rule_input.artifact
    declared = declared_prereqs(artifact.metadata_documents)
    namespace = dist_to_namespace(artifact.name)
    ignored = set(rule_input.config.ignored_modules)

    violations: list[Violation] = []
    seen: set[str] = set()
    for usage in rule_input.usage:
        module = usage.module
        if module in seen or module in ignored or in_namespace(module, namespace):
            continue
        seen.add(module)

        declared_version = declared.get(module)
        if declared_version is None:
            wanted = f" (>= {usage.minimum_version})" if usage.minimum_version else ""
            violations.append(
                Violation(
                    kind="UndeclaredDependency",
                    location=module,
                    message=f"{module}{wanted} is used but not declared in prereqs",
                )
            )
        elif usage.minimum_version and declared_version in {"", "0"}:
            violations.append(
                Violation(
                    kind="MissingMinimumVersion",
                    location=module,
                    message=(
                        f"{module} is declared without a minimum version; "
                        f"{usage.minimum_version} is known to be required"
                    ),
                )
            )
    return violations


__all__ = ["check_dependency_completeness"]
