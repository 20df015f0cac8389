"""Version parsing, normalization and comparison.

Two textual forms are understood:

- decimal form (``1.23``, ``1.1901``, ``2``): the fractional digits are read
  in fixed-width groups, right-padded with zeros, so ``1.1901`` becomes
  ``(1, 190, 100)`` and ``1.20`` becomes ``(1, 200)``.
- vstring form (``v1.2.3`` or any dotted form with two or more dots): the
  literal integer tuple.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

DEFAULT_GROUP_WIDTH = 3

VersionForm = Literal["decimal", "vstring"]

_DECIMAL_RE = re.compile(r"^(?P<major>\d+)(?:\.(?P<fraction>\d+)(?:_(?P<trial>\d+))?)?$")
_VSTRING_RE = re.compile(r"^v(?P<body>\d+(?:\.\d+)*)$")
_DOTTED_RE = re.compile(r"^(?P<body>\d+\.\d+(?:\.\d+)+)$")


class InvalidVersion(ValueError):
    """Raised when text cannot be read as a version."""


@dataclass(frozen=True, eq=False)
class VersionSpec:
    raw: str
    form: VersionForm
    parts: tuple[int, ...]
    fraction_digits: int = 0
    trial: bool = False

    def normalized(self) -> tuple[int, ...]:
        """Return parts with trailing zero segments removed."""
        parts = list(self.parts)
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return tuple(parts)

    def as_vstring(self) -> str:
        return "v" + ".".join(str(part) for part in self.parts)

    def _padded(self, other: VersionSpec) -> tuple[tuple[int, ...], tuple[int, ...]]:
        width = max(len(self.parts), len(other.parts))
        left = self.parts + (0,) * (width - len(self.parts))
        right = other.parts + (0,) * (width - len(other.parts))
        return left, right

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionSpec):
            return NotImplemented
        left, right = self._padded(other)
        return left == right

    def __hash__(self) -> int:
        return hash(self.normalized())

    def __lt__(self, other: VersionSpec) -> bool:
        left, right = self._padded(other)
        return left < right

    def __le__(self, other: VersionSpec) -> bool:
        left, right = self._padded(other)
        return left <= right

    def __gt__(self, other: VersionSpec) -> bool:
        left, right = self._padded(other)
        return left > right

    def __ge__(self, other: VersionSpec) -> bool:
        left, right = self._padded(other)
        return left >= right

    def __str__(self) -> str:
        return self.raw


def _group_fraction(fraction: str, width: int) -> tuple[int, ...]:
    remainder = len(fraction) % width
    if remainder:
        fraction = fraction + "0" * (width - remainder)
    return tuple(
        int(fraction[index : index + width])
        for index in range(0, len(fraction), width)
    )


def parse_version(text: str, *, width: int = DEFAULT_GROUP_WIDTH) -> VersionSpec:
    """Parse a version in decimal or vstring form.

    Args:
        text: Version text as written in metadata, changelog or lineage.
        width: Digits per tuple segment for decimal fractions.

    Raises:
        InvalidVersion: If the text is in neither form.
    """
    if width < 1:
        msg = f"group width must be positive, got {width}"
        raise ValueError(msg)

    raw = str(text).strip()

    match = _VSTRING_RE.match(raw) or _DOTTED_RE.match(raw)
    if match is not None:
        parts = tuple(int(part) for part in match.group("body").split("."))
        return VersionSpec(raw=raw, form="vstring", parts=parts)

    match = _DECIMAL_RE.match(raw)
    if match is None:
        msg = f"not a decimal or dotted version: {raw!r}"
        raise InvalidVersion(msg)

    major = int(match.group("major"))
    fraction = match.group("fraction") or ""
    trial = match.group("trial")
    if trial is not None:
        fraction += trial

    parts = (major,)
    if fraction:
        parts += _group_fraction(fraction, width)
    return VersionSpec(
        raw=raw,
        form="decimal",
        parts=parts,
        fraction_digits=len(fraction),
        trial=trial is not None,
    )


def is_ambiguous_width(
    left: VersionSpec, right: VersionSpec, *, width: int = DEFAULT_GROUP_WIDTH
) -> bool:
    """Return True when two decimal versions use incompatible digit widths.

    ``1.190`` followed by ``1.20`` reads as an increase when the fractions are
    grouped by three but as a decrease when read as plain decimals. Versions
    without a fractional part never participate.
    """
    if left.form != "decimal" or right.form != "decimal":
        return False
    if not left.fraction_digits or not right.fraction_digits:
        return False
    if left.fraction_digits == right.fraction_digits:
        return False
    return not (
        left.fraction_digits % width == 0 and right.fraction_digits % width == 0
    )


__all__ = [
    "DEFAULT_GROUP_WIDTH",
    "InvalidVersion",
    "VersionForm",
    "VersionSpec",
    "is_ambiguous_width",
    "parse_version",
]
