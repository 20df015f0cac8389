"""Report models and the aggregation step."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field

from metacheck.contract.artifacts import REPORT_SCHEMA_VERSION
from metacheck.rules.catalog import RULE_ORDER

if TYPE_CHECKING:
    from metacheck.contract.models import DistributionArtifact
    from metacheck.rules.base import RuleResult
    from metacheck.rules.engine import CheckRun

Severity = Literal["warning"]


class ViolationRecord(BaseModel):
    """A single non-conformance."""

    kind: str
    location: str
    message: str


class RuleReport(BaseModel):
    """Outcome of one rule."""

    status: Literal["passed", "failed", "skipped"]
    severity: Severity = "warning"
    reason: str | None = None
    violations: list[ViolationRecord] = Field(default_factory=list)


class ArtifactSummary(BaseModel):
    name: str
    version: str


class Report(BaseModel):
    """Conformance report for one distribution."""

    schema_version: int = Field(default=REPORT_SCHEMA_VERSION)
    artifact: ArtifactSummary
    status: Literal["complete", "incomplete"]
    conformant: bool
    rules: dict[str, RuleReport] = Field(default_factory=dict)

    @property
    def violation_count(self) -> int:
        return sum(len(rule.violations) for rule in self.rules.values())


def _rule_sort_key(result: RuleResult) -> tuple[int, str]:
    return (RULE_ORDER.get(result.rule, len(RULE_ORDER)), result.rule)


def build_report(artifact: DistributionArtifact, run: CheckRun) -> Report:
    """Aggregate rule results in catalog order.

    Ordering is imposed here rather than during execution, so the report is
    identical whatever order the rules finished in.
    """
    summary = ArtifactSummary(name=artifact.name, version=artifact.version)
    if not run.complete:
        return Report(artifact=summary, status="incomplete", conformant=False)

    rules: dict[str, RuleReport] = {}
    for result in sorted(run.results, key=_rule_sort_key):
        violations = sorted(result.violations, key=lambda v: v.sort_key())
        rules[result.rule] = RuleReport(
            status=result.status,
            reason=result.reason,
            violations=[
                ViolationRecord(
                    kind=violation.kind,
                    location=violation.location,
                    message=violation.message,
                )
                for violation in violations
            ],
        )

    conformant = not any(
        rule.violations for rule in rules.values() if rule.status != "skipped"
    )
    return Report(
        artifact=summary,
        status="complete",
        conformant=conformant,
        rules=rules,
    )


__all__ = [
    "ArtifactSummary",
    "Report",
    "RuleReport",
    "ViolationRecord",
    "build_report",
]
