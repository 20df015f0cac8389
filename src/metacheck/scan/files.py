"""File scanning utilities for unpacked distributions."""

from __future__ import annotations

import tempfile
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from metacheck.contract.artifacts import GITIGNORE

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator


def _should_include_file(path: Path, directory: Path) -> bool:
    """Check if a file belongs to the distribution tree."""
    if not path.is_file() or path.is_symlink():
        return False

    return _is_within_root(path, directory)


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def find_distribution_files(directory: Path) -> Iterator[str]:
    """Find all files in an unpacked distribution.

    Yields:
        POSIX relative paths, sorted lexicographically for deterministic
        ordering. Symlinks and anything resolving outside the directory are
        skipped.
    """
    matched_files = [
        path.relative_to(directory).as_posix()
        for path in directory.rglob("*")
        if _should_include_file(path, directory)
    ]

    matched_files.sort()

    yield from matched_files


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch(path, pattern) for pattern in patterns)


def find_ignored_files(gitignore_text: str, files: Iterable[str]) -> tuple[str, ...]:
    """Return the files a shipped .gitignore would have excluded.

    The ignore file is evaluated against a scratch base directory so the same
    code path serves unpacked trees and archive members.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        base = Path(temp_dir)
        gitignore_path = base / GITIGNORE
        gitignore_path.write_text(gitignore_text, encoding="utf-8")
        matches = cast(
            "Callable[[str], bool]", parse_gitignore(gitignore_path, base_dir=base)
        )
        ignored = [
            rel_path
            for rel_path in files
            if rel_path != GITIGNORE and matches(str(base / rel_path))
        ]
    return tuple(sorted(ignored))


__all__ = [
    "find_distribution_files",
    "find_ignored_files",
    "matches_any",
]
