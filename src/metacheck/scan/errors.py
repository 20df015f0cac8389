"""Load failures raised while building a distribution model."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LoadErrorKind(str, Enum):
    """Why a distribution could not be turned into a model."""

    MISSING_METADATA = "MissingMetadata"
    UNPARSABLE_METADATA = "UnparsableMetadata"
    UNREADABLE_PATH = "UnreadablePath"


class LoadError(Exception):
    """Raised when input cannot be parsed into a model at all."""

    def __init__(self, kind: LoadErrorKind, path: Path | str, message: str) -> None:
        super().__init__(f"{kind.value}: {path}: {message}")
        self.kind = kind
        self.path = str(path)
        self.message = message


__all__ = ["LoadError", "LoadErrorKind"]
