"""Readers for the optional lineage and dependency-usage lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from metacheck.contract.models import DependencyUsage
from metacheck.scan.errors import LoadError, LoadErrorKind
from metacheck.versions import DEFAULT_GROUP_WIDTH, InvalidVersion, parse_version

if TYPE_CHECKING:
    from pathlib import Path

    from metacheck.versions import VersionSpec


def _read_lines(path: Path) -> list[tuple[int, str]]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(LoadErrorKind.UNREADABLE_PATH, path, str(exc)) from exc

    lines: list[tuple[int, str]] = []
    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.split("#", 1)[0].strip()
        if line:
            lines.append((line_number, line))
    return lines


def load_lineage(
    path: Path, *, width: int = DEFAULT_GROUP_WIDTH
) -> tuple[VersionSpec, ...]:
    """Read released versions, one per line, oldest first."""
    lineage: list[VersionSpec] = []
    for line_number, line in _read_lines(path):
        try:
            lineage.append(parse_version(line.split()[0], width=width))
        except InvalidVersion as exc:
            raise LoadError(
                LoadErrorKind.UNPARSABLE_METADATA, f"{path}:{line_number}", str(exc)
            ) from exc
    return tuple(lineage)


def load_usage(path: Path) -> tuple[DependencyUsage, ...]:
    """Read ``Module::Name [minimum_version]`` lines."""
    usage: list[DependencyUsage] = []
    for _line_number, line in _read_lines(path):
        fields = line.split()
        usage.append(
            DependencyUsage(
                module=fields[0],
                minimum_version=fields[1] if len(fields) > 1 else None,
            )
        )
    return tuple(usage)


__all__ = ["load_lineage", "load_usage"]
