"""Distribution loading for metacheck."""

from metacheck.scan.errors import LoadError, LoadErrorKind
from metacheck.scan.inputs import load_lineage, load_usage
from metacheck.scan.loader import load_artifact

__all__ = [
    "LoadError",
    "LoadErrorKind",
    "load_artifact",
    "load_lineage",
    "load_usage",
]
