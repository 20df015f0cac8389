"""Determinism verification for stored conformance reports."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from metacheck.check import check_distribution
from metacheck.report.render import render_json

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    diff: tuple[str, ...] = field(default_factory=tuple)


def verify_report(*, root: Path, report_path: Path, **check_options: Any) -> DeterminismResult:
    """Verify that a stored JSON report matches a fresh check byte for byte.

    Args:
        root: Distribution directory or archive to re-check.
        report_path: Previously written JSON report.
        **check_options: Passed through to check_distribution (config,
            lineage, usage, archive_name).

    Returns:
        DeterminismResult with ok status and a unified diff of the stored
        report against the regenerated one.

    Raises:
        FileNotFoundError: If report_path does not exist.
        IsADirectoryError: If report_path is a directory.
    """
    if not report_path.exists():
        msg = f"Report file does not exist: {report_path}"
        raise FileNotFoundError(msg)
    if report_path.is_dir():
        msg = f"Report path is a directory: {report_path}"
        raise IsADirectoryError(msg)

    stored = report_path.read_bytes()
    regenerated = render_json(check_distribution(root, **check_options))
    if stored == regenerated:
        return DeterminismResult(ok=True)

    diff = difflib.unified_diff(
        stored.decode("utf-8", errors="replace").splitlines(),
        regenerated.decode("utf-8").splitlines(),
        fromfile=str(report_path),
        tofile="regenerated",
        lineterm="",
    )
    return DeterminismResult(ok=False, diff=tuple(diff))


__all__ = ["DeterminismResult", "verify_report"]
