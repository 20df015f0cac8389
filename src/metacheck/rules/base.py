"""Core rule data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from metacheck.rules.config import MetacheckConfig
from metacheck.versions import VersionSpec, parse_version

if TYPE_CHECKING:
    from collections.abc import Callable

    from metacheck.contract.models import DependencyUsage, DistributionArtifact

RuleStatus = Literal["passed", "failed", "skipped"]


@dataclass(frozen=True)
class Violation:
    kind: str
    location: str
    message: str

    def sort_key(self) -> tuple[str, str, str]:
        return (self.kind, self.location, self.message)

    def to_dict(self) -> dict[str, str]:
        return {
            "kind": self.kind,
            "location": self.location,
            "message": self.message,
        }


class RuleSkipped(Exception):
    """Raised by a rule that lacks the input it needs.

    Absence of information is not evidence of non-conformance.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class RuleInput:
    """Immutable snapshot every rule is evaluated against."""

    artifact: DistributionArtifact
    lineage: tuple[VersionSpec, ...] | None = None
    usage: tuple[DependencyUsage, ...] | None = None
    config: MetacheckConfig = field(default_factory=MetacheckConfig)

    @property
    def width(self) -> int:
        return self.config.version_group_width

    def artifact_version(self) -> VersionSpec:
        return parse_version(self.artifact.version, width=self.width)


@dataclass(frozen=True)
class Rule:
    name: str
    check: Callable[[RuleInput], list[Violation]]
    description: str = ""


@dataclass(frozen=True)
class RuleResult:
    rule: str
    status: RuleStatus
    violations: tuple[Violation, ...] = ()
    reason: str | None = None


__all__ = [
    "Rule",
    "RuleInput",
    "RuleResult",
    "RuleSkipped",
    "RuleStatus",
    "Violation",
]
