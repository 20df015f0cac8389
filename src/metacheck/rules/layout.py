"""Layout rules: archive naming, required files, MANIFEST and leftovers."""

from __future__ import annotations

import re
from fnmatch import fnmatch
from typing import TYPE_CHECKING

from metacheck.contract.artifacts import MANIFEST
from metacheck.rules.base import RuleSkipped, Violation
from metacheck.scan.files import matches_any

if TYPE_CHECKING:
    from metacheck.rules.base import RuleInput

_NAME_VERSION_RE = re.compile(r"^(?P<name>.+?)-(?P<version>v?\d[\d._]*)$")


def _split_extension(archive_name: str, extensions: list[str]) -> tuple[str, str] | None:
    for extension in sorted(extensions, key=len, reverse=True):
        if archive_name.endswith(extension) and len(archive_name) > len(extension):
            return archive_name[: -len(extension)], extension
    return None


def check_archive_naming(rule_input: RuleInput) -> list[Violation]:
    """Archive is Name-Version.<ext> and unpacks to a single Name-Version root."""
    artifact = rule_input.artifact
    archive_name = artifact.archive_name
    if archive_name is None:
        msg = "no archive name known"
        raise RuleSkipped(msg)

    expected_stem = f"{artifact.name}-{artifact.version}"
    violations: list[Violation] = []

    split = _split_extension(archive_name, rule_input.config.archive_extensions)
    if split is None:
        allowed = "|".join(rule_input.config.archive_extensions)
        violations.append(
            Violation(
                kind="BadArchiveName",
                location=archive_name,
                message=f"archive does not end in one of ({allowed})",
            )
        )
        stem = expected_stem
    else:
        stem, _extension = split
        if _NAME_VERSION_RE.match(stem) is None:
            violations.append(
                Violation(
                    kind="BadArchiveName",
                    location=archive_name,
                    message=f"archive stem '{stem}' is not of the form Name-Version",
                )
            )
        elif stem != expected_stem:
            violations.append(
                Violation(
                    kind="BadArchiveName",
                    location=archive_name,
                    message=f"archive stem '{stem}' does not match '{expected_stem}'",
                )
            )

    if artifact.unpack_roots != (stem,):
        found = ", ".join(artifact.unpack_roots) or "nothing"
        violations.append(
            Violation(
                kind="BadUnpackRoot",
                location=archive_name,
                message=f"archive unpacks to {found}, expected single directory '{stem}'",
            )
        )

    return violations


def check_required_files(rule_input: RuleInput) -> list[Violation]:
    files = rule_input.artifact.files
    return [
        Violation(
            kind="MissingRequiredFile",
            location=pattern,
            message=f"no shipped file matches '{pattern}'",
        )
        for pattern in rule_input.config.required_files
        if not any(fnmatch(path, pattern) for path in files)
    ]


def check_manifest_consistency(rule_input: RuleInput) -> list[Violation]:
    """MANIFEST lists exactly the shipped files."""
    artifact = rule_input.artifact
    if artifact.manifest is None:
        msg = f"no {MANIFEST} file"
        raise RuleSkipped(msg)

    listed = set(artifact.manifest)
    shipped = set(artifact.files)
    junk = rule_input.config.junk_patterns

    violations = [
        Violation(
            kind="ManifestMissingFile",
            location=path,
            message=f"listed in {MANIFEST} but not shipped",
        )
        for path in sorted(listed - shipped)
    ]
    violations.extend(
        Violation(
            kind="UnlistedFile",
            location=path,
            message=f"shipped but not listed in {MANIFEST}",
        )
        for path in sorted(shipped - listed)
        if not matches_any(path, junk)
    )
    return violations


def check_no_junk_files(rule_input: RuleInput) -> list[Violation]:
    """No build or VCS leftovers, nothing the shipped .gitignore excludes."""
    artifact = rule_input.artifact
    violations: list[Violation] = []
    junk_files: set[str] = set()

    patterns = rule_input.config.junk_patterns
    directory_patterns = [p for p in patterns if p.endswith("/*")]
    file_patterns = [p for p in patterns if not p.endswith("/*")]

    # Directory patterns first: files under a junk directory are reported once.
    for pattern in directory_patterns:
        matched = [path for path in artifact.files if fnmatch(path, pattern)]
        if not matched:
            continue
        junk_files.update(matched)
        directory = pattern[:-1]
        violations.append(
            Violation(
                kind="JunkFileShipped",
                location=directory,
                message=f"directory {directory} shipped ({len(matched)} files)",
            )
        )

    for pattern in file_patterns:
        matched = [
            path
            for path in artifact.files
            if path not in junk_files and fnmatch(path, pattern)
        ]
        junk_files.update(matched)
        violations.extend(
            Violation(
                kind="JunkFileShipped",
                location=path,
                message=f"build or VCS leftover matching '{pattern}'",
            )
            for path in matched
        )

    violations.extend(
        Violation(
            kind="IgnoredFileShipped",
            location=path,
            message="shipped although the distribution's .gitignore excludes it",
        )
        for path in artifact.ignored_files
        if path not in junk_files
    )
    return violations


__all__ = [
    "check_archive_naming",
    "check_manifest_consistency",
    "check_no_junk_files",
    "check_required_files",
]
