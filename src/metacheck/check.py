"""End-to-end conformance check: load, evaluate, aggregate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from metacheck.contract.models import DependencyUsage
from metacheck.report.builders import build_report
from metacheck.rules.base import RuleInput
from metacheck.rules.config import load_config
from metacheck.rules.engine import run_rules
from metacheck.scan.errors import LoadError, LoadErrorKind
from metacheck.scan.loader import load_artifact
from metacheck.versions import InvalidVersion, VersionSpec, parse_version

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from metacheck.report.builders import Report
    from metacheck.rules.base import Rule
    from metacheck.rules.config import MetacheckConfig


def _coerce_lineage(
    lineage: Sequence[VersionSpec | str] | None, width: int
) -> tuple[VersionSpec, ...] | None:
    if lineage is None:
        return None
    versions: list[VersionSpec] = []
    for index, item in enumerate(lineage):
        if isinstance(item, VersionSpec):
            versions.append(item)
            continue
        try:
            versions.append(parse_version(item, width=width))
        except InvalidVersion as exc:
            raise LoadError(
                LoadErrorKind.UNPARSABLE_METADATA, f"lineage[{index}]", str(exc)
            ) from exc
    return tuple(versions)


def _coerce_usage(
    usage: Sequence[DependencyUsage | str] | None,
) -> tuple[DependencyUsage, ...] | None:
    if usage is None:
        return None
    return tuple(
        item if isinstance(item, DependencyUsage) else DependencyUsage(module=item)
        for item in usage
    )


def check_distribution(
    path: Path,
    *,
    config: MetacheckConfig | None = None,
    lineage: Sequence[VersionSpec | str] | None = None,
    usage: Sequence[DependencyUsage | str] | None = None,
    archive_name: str | None = None,
    rules: Sequence[Rule] | None = None,
) -> Report:
    """Check a distribution directory or archive for conformance.

    Args:
        path: Unpacked distribution directory or release archive.
        config: Check settings; read from metacheck.toml under path if omitted.
        lineage: Prior released versions, oldest first.
        usage: Modules the distribution is known to use.
        archive_name: Archive file name for a directory input.
        rules: Rules to run instead of the enabled catalog.

    Returns:
        The aggregated report. Checking unchanged input twice yields equal
        reports.

    Raises:
        LoadError: If the distribution cannot be read into a model.
        ConfigError: If metacheck.toml exists but is invalid.
    """
    if config is None:
        config = load_config(path)

    artifact = load_artifact(path, config=config, archive_name=archive_name)
    rule_input = RuleInput(
        artifact=artifact,
        lineage=_coerce_lineage(lineage, config.version_group_width),
        usage=_coerce_usage(usage),
        config=config,
    )
    run = run_rules(rule_input, rules)
    return build_report(artifact, run)


__all__ = ["check_distribution"]
