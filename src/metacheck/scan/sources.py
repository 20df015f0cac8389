"""Read-only views over an unpacked directory or a release archive."""

from __future__ import annotations

import tarfile
import zipfile
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Protocol

from metacheck.scan.errors import LoadError, LoadErrorKind
from metacheck.scan.files import find_distribution_files

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class DistributionSource(Protocol):
    files: tuple[str, ...]
    archive_name: str | None
    unpack_roots: tuple[str, ...]

    def read_bytes(self, rel_path: str) -> bytes: ...


class DirectorySource:
    """An unpacked distribution on disk."""

    def __init__(self, root: Path, *, archive_name: str | None = None) -> None:
        self.root = root
        self.archive_name = archive_name
        self.unpack_roots = (root.name,)
        try:
            self.files = tuple(find_distribution_files(root))
        except OSError as exc:
            raise LoadError(LoadErrorKind.UNREADABLE_PATH, root, str(exc)) from exc

    def read_bytes(self, rel_path: str) -> bytes:
        try:
            return (self.root / rel_path).read_bytes()
        except OSError as exc:
            raise LoadError(
                LoadErrorKind.UNREADABLE_PATH, self.root / rel_path, str(exc)
            ) from exc


def _normalize_member(name: str) -> str:
    parts = [part for part in PurePosixPath(name).parts if part not in {".", "/"}]
    return PurePosixPath(*parts).as_posix() if parts else ""


def _split_roots(
    member_names: Sequence[str],
    file_names: Sequence[str],
) -> tuple[tuple[str, ...], dict[str, str]]:
    """Return unpack roots and a relative-path -> member-name mapping.

    Paths are made relative to the top directory only when the archive has
    exactly one and every file lives below it.
    """
    normalized = [_normalize_member(name) for name in member_names]
    roots = sorted({PurePosixPath(name).parts[0] for name in normalized if name})

    files = {_normalize_member(name): name for name in file_names}
    files.pop("", None)

    single_root = len(roots) == 1 and all(
        len(PurePosixPath(rel).parts) > 1 for rel in files
    )
    if not single_root:
        return tuple(roots), dict(sorted(files.items()))

    prefix_len = len(roots[0]) + 1
    stripped = {rel[prefix_len:]: name for rel, name in files.items()}
    return tuple(roots), dict(sorted(stripped.items()))


class ArchiveSource:
    """A release archive read in place, without extraction."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.archive_name = path.name
        self._tar: tarfile.TarFile | None = None
        self._zip: zipfile.ZipFile | None = None

        try:
            if zipfile.is_zipfile(path):
                self._zip = zipfile.ZipFile(path)
                infos = self._zip.infolist()
                member_names = [info.filename for info in infos]
                file_names = [info.filename for info in infos if not info.is_dir()]
            else:
                self._tar = tarfile.open(path, mode="r:*")
                members = self._tar.getmembers()
                member_names = [member.name for member in members]
                file_names = [member.name for member in members if member.isfile()]
        except (OSError, tarfile.TarError, zipfile.BadZipFile) as exc:
            self.close()
            raise LoadError(LoadErrorKind.UNREADABLE_PATH, path, str(exc)) from exc

        self.unpack_roots, self._members = _split_roots(member_names, file_names)
        self.files = tuple(self._members)

    def read_bytes(self, rel_path: str) -> bytes:
        member = self._members[rel_path]
        try:
            if self._zip is not None:
                return self._zip.read(member)
            assert self._tar is not None
            handle = self._tar.extractfile(member)
            if handle is None:
                msg = "member is not a regular file"
                raise LoadError(LoadErrorKind.UNREADABLE_PATH, rel_path, msg)
            with handle:
                return handle.read()
        except (OSError, tarfile.TarError, zipfile.BadZipFile) as exc:
            raise LoadError(
                LoadErrorKind.UNREADABLE_PATH, f"{self.path}:{rel_path}", str(exc)
            ) from exc

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
        if self._tar is not None:
            self._tar.close()


def is_archive_path(path: Path, extensions: Sequence[str]) -> bool:
    return path.is_file() and any(path.name.endswith(ext) for ext in extensions)


@contextmanager
def open_source(
    path: Path,
    *,
    archive_extensions: Sequence[str],
    archive_name: str | None = None,
) -> Iterator[DistributionSource]:
    """Open a directory or archive as a distribution source.

    Raises:
        LoadError: UnreadablePath when the path is missing, unreadable, or
            neither a directory nor a readable archive.
    """
    if not path.exists():
        raise LoadError(LoadErrorKind.UNREADABLE_PATH, path, "path does not exist")

    if path.is_dir():
        yield DirectorySource(path, archive_name=archive_name)
        return

    if not is_archive_path(path, archive_extensions) and not (
        path.is_file() and (zipfile.is_zipfile(path) or tarfile.is_tarfile(path))
    ):
        raise LoadError(
            LoadErrorKind.UNREADABLE_PATH,
            path,
            "not a directory or a supported archive",
        )

    source = ArchiveSource(path)
    try:
        yield source
    finally:
        source.close()


__all__ = [
    "ArchiveSource",
    "DirectorySource",
    "DistributionSource",
    "is_archive_path",
    "open_source",
]
