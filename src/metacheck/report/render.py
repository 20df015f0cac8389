"""Report serialization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import orjson

if TYPE_CHECKING:
    from pathlib import Path

    from metacheck.report.builders import Report

ReportFormat = Literal["json", "text"]


def render_json(report: Report) -> bytes:
    """Serialize a report as indented JSON.

    Key order follows the model and the catalog, not alphabetical order, so
    the output reads in rule order.
    """
    payload = report.model_dump(mode="json")
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n"


def render_text(report: Report) -> str:
    artifact = report.artifact
    lines = [f"{artifact.name} {artifact.version}"]

    if report.status == "incomplete":
        lines.append("INCOMPLETE: check timed out, no conformance verdict")
        return "\n".join(lines) + "\n"

    for name, rule in report.rules.items():
        if rule.status == "skipped":
            lines.append(f"{name}: skipped ({rule.reason})")
            continue
        if not rule.violations:
            lines.append(f"{name}: ok")
            continue
        lines.append(f"{name}: {len(rule.violations)} {rule.severity}(s)")
        lines.extend(
            f"  {violation.kind} {violation.location}: {violation.message}"
            for violation in rule.violations
        )

    verdict = "conformant" if report.conformant else "not conformant"
    lines.append(f"{verdict} ({report.violation_count} violation(s))")
    return "\n".join(lines) + "\n"


def render(report: Report, fmt: ReportFormat = "json") -> bytes:
    if fmt == "text":
        return render_text(report).encode("utf-8")
    return render_json(report)


def write_report(path: Path, report: Report, fmt: ReportFormat = "json") -> None:
    path.write_bytes(render(report, fmt))


__all__ = ["ReportFormat", "render", "render_json", "render_text", "write_report"]
