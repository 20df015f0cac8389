"""Changelog parsing.

One record per release: a ``<version> <timestamp>`` header at column 0,
followed by indented items. A bullet (``-``, ``*`` or ``+``) starts an item;
indented lines without a bullet continue the previous one.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from metacheck.contract.models import ChangelogEntry

_HEADER_RE = re.compile(r"^(?P<version>v?\d[\d._]*)(?:\s+(?P<rest>.*?))?\s*$")
_BULLET_RE = re.compile(r"^[-*+]\s*(?P<text>.*)$")
_TZ_SUFFIX_RE = re.compile(r"\s+(?P<sign>[+-])(?P<hh>\d{2}):?(?P<mm>\d{2})$")


def parse_timestamp(text: str) -> datetime | date | None:
    """Parse an ISO date or date-time; the timezone is optional.

    Returns None for anything else.
    """
    value = text.strip()
    if not value:
        return None

    if len(value) == 10:
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None

    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    value = _TZ_SUFFIX_RE.sub(
        lambda m: f"{m.group('sign')}{m.group('hh')}:{m.group('mm')}", value
    )
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def parse_changelog(text: str) -> tuple[ChangelogEntry, ...]:
    """Parse changelog text into entries in file order (newest first)."""
    entries: list[ChangelogEntry] = []
    current: dict[str, object] | None = None
    items: list[str] = []

    def _flush() -> None:
        if current is not None:
            entries.append(ChangelogEntry(**current, items=tuple(items)))

    for line_number, raw_line in enumerate(text.splitlines(), 1):
        if not raw_line.strip():
            continue

        if not raw_line[0].isspace():
            match = _HEADER_RE.match(raw_line)
            if match is None:
                # Preamble such as "Revision history for Foo-Bar".
                continue
            _flush()
            rest = match.group("rest") or ""
            timestamp = rest.split("#", 1)[0].strip() or None
            current = {
                "version": match.group("version"),
                "timestamp": timestamp,
                "released": parse_timestamp(timestamp) if timestamp else None,
                "line": line_number,
            }
            items = []
            continue

        if current is None:
            continue

        stripped = raw_line.strip()
        bullet = _BULLET_RE.match(stripped)
        if bullet is not None:
            items.append(bullet.group("text").strip())
        elif items:
            items[-1] = f"{items[-1]} {stripped}"
        else:
            items.append(stripped)

    _flush()
    return tuple(entries)


__all__ = ["parse_changelog", "parse_timestamp"]
