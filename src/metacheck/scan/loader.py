"""Build a DistributionArtifact from a directory or archive."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from metacheck.contract.artifacts import (
    GITIGNORE,
    LICENSE_FILENAMES,
    LICENSE_SECTION_TITLES,
    MANIFEST,
    METADATA_FILES,
    METADATA_LICENSE_LOCATIONS,
    LicenseLocation,
    MetadataKind,
)
from metacheck.contract.models import DistributionArtifact
from metacheck.logging import get_logger
from metacheck.rules.config import CONFIG_FILENAME, MetacheckConfig
from metacheck.scan.changelog import parse_changelog
from metacheck.scan.docs import extract_sections
from metacheck.scan.errors import LoadError, LoadErrorKind
from metacheck.scan.files import find_ignored_files, matches_any
from metacheck.scan.metadata import declares_license, parse_metadata, scalar_text
from metacheck.scan.sources import open_source
from metacheck.versions import InvalidVersion, parse_version

if TYPE_CHECKING:
    from pathlib import Path

    from metacheck.scan.sources import DistributionSource

logger = get_logger("scan")


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _identity(
    documents: dict[MetadataKind, dict[str, Any]],
    source: DistributionSource,
    path: Path,
) -> tuple[str, str]:
    """Pick name and version, preferring META.json over META.yml."""
    name: str | None = None
    version: str | None = None
    for kind in ("json", "yaml"):
        document = documents.get(kind)
        if document is None:
            continue
        declared = document.get("version")
        if declared is not None and not isinstance(declared, str):
            # A numeric 1.20 has already lost its trailing zero.
            raise LoadError(
                LoadErrorKind.UNPARSABLE_METADATA,
                METADATA_FILES[kind],
                f"version must be a string, "
                f"got {type(declared).__name__} {declared!r}",
            )
        name = name or scalar_text(document.get("name"))
        version = version or scalar_text(document.get("version"))

    if not version:
        raise LoadError(
            LoadErrorKind.UNPARSABLE_METADATA,
            path,
            "no metadata document declares a version",
        )

    if not name:
        fallback = source.unpack_roots[0] if len(source.unpack_roots) == 1 else path.name
        name = fallback.removesuffix(f"-{version}")

    return name, version


def parse_manifest(text: str) -> tuple[str, ...]:
    """Return the paths listed in a MANIFEST, in file order.

    Paths containing spaces are single-quoted, with backslash escapes.
    """
    entries: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("'"):
            chars: list[str] = []
            escaped = False
            for char in line[1:]:
                if escaped:
                    chars.append(char)
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == "'":
                    break
                else:
                    chars.append(char)
            entries.append("".join(chars))
        else:
            entries.append(line.split()[0])
    return tuple(entries)


def _first_line(raw: bytes) -> str:
    head = raw.split(b"\n", 1)[0]
    return _decode(head).rstrip("\r")


def _is_script(rel_path: str, script_dirs: list[str]) -> bool:
    parts = PurePosixPath(rel_path).parts
    return len(parts) > 1 and parts[0] in script_dirs


def _license_declarations(
    documents: dict[MetadataKind, dict[str, Any]],
    files: tuple[str, ...],
    documentation: dict[str, dict[str, str]],
) -> frozenset[LicenseLocation]:
    locations: set[LicenseLocation] = set()
    for kind, document in documents.items():
        if declares_license(document):
            locations.add(METADATA_LICENSE_LOCATIONS[kind])

    if any(name in files for name in LICENSE_FILENAMES):
        locations.add("license-file")

    for sections in documentation.values():
        if any(
            title in LICENSE_SECTION_TITLES and body
            for title, body in sections.items()
        ):
            locations.add("documentation")
            break

    return frozenset(locations)


def _read_from_source(
    source: DistributionSource,
    path: Path,
    config: MetacheckConfig,
) -> DistributionArtifact:
    manifest = None
    if MANIFEST in source.files:
        manifest = parse_manifest(_decode(source.read_bytes(MANIFEST)))

    # The checker's own config is not part of the release unless listed.
    listed = set(manifest or ())
    files = tuple(
        rel_path
        for rel_path in source.files
        if rel_path != CONFIG_FILENAME or rel_path in listed
    )

    documents: dict[MetadataKind, dict[str, Any]] = {}
    for kind, filename in METADATA_FILES.items():
        if filename in files:
            documents[kind] = parse_metadata(kind, filename, source.read_bytes(filename))
            logger.debug("parsed %s (%d keys)", filename, len(documents[kind]))

    if not documents:
        raise LoadError(
            LoadErrorKind.MISSING_METADATA,
            path,
            f"neither {' nor '.join(METADATA_FILES.values())} is present",
        )

    name, version = _identity(documents, source, path)
    try:
        parse_version(version, width=config.version_group_width)
    except InvalidVersion as exc:
        raise LoadError(LoadErrorKind.UNPARSABLE_METADATA, path, str(exc)) from exc

    changelog_path = next(
        (candidate for candidate in config.changelog_files if candidate in files),
        None,
    )
    changelog_entries = ()
    if changelog_path is not None:
        changelog_entries = parse_changelog(_decode(source.read_bytes(changelog_path)))
        logger.debug("parsed %d changelog entries", len(changelog_entries))

    documentation = {
        rel_path: extract_sections(rel_path, _decode(source.read_bytes(rel_path)))
        for rel_path in files
        if matches_any(rel_path, config.documentation_globs)
    }

    shebang_lines = {
        rel_path: _first_line(source.read_bytes(rel_path))
        for rel_path in files
        if _is_script(rel_path, config.script_dirs)
    }

    ignored_files: tuple[str, ...] = ()
    if GITIGNORE in files:
        ignored_files = find_ignored_files(
            _decode(source.read_bytes(GITIGNORE)), files
        )

    return DistributionArtifact(
        name=name,
        version=version,
        files=files,
        metadata_documents=documents,
        changelog_path=changelog_path,
        changelog_entries=changelog_entries,
        license_declarations=_license_declarations(documents, files, documentation),
        shebang_lines=shebang_lines,
        documentation=documentation,
        manifest=manifest,
        archive_name=source.archive_name,
        unpack_roots=source.unpack_roots,
        ignored_files=ignored_files,
    )


def load_artifact(
    path: Path,
    *,
    config: MetacheckConfig | None = None,
    archive_name: str | None = None,
) -> DistributionArtifact:
    """Load a distribution directory or archive into a model.

    Args:
        path: Unpacked distribution directory or release archive.
        config: Check settings; defaults apply when omitted.
        archive_name: Archive file name for a directory input, when known.

    Raises:
        LoadError: MissingMetadata, UnparsableMetadata or UnreadablePath.
    """
    if config is None:
        config = MetacheckConfig()

    with open_source(
        path,
        archive_extensions=config.archive_extensions,
        archive_name=archive_name,
    ) as source:
        logger.debug("scanning %s (%d files)", path, len(source.files))
        return _read_from_source(source, path, config)


__all__ = ["load_artifact", "parse_manifest"]
