"""Report determinism verification."""

from metacheck.verify.verify import DeterminismResult, verify_report

__all__ = ["DeterminismResult", "verify_report"]
