"""Rule definitions for metacheck."""

from metacheck.rules.config import (
    ConfigError,
    MetacheckConfig,
    load_config,
)
from metacheck.rules.base import (
    Rule,
    RuleInput,
    RuleResult,
    RuleSkipped,
    Violation,
)
from metacheck.rules.catalog import CATALOG, RULE_NAMES, enabled_rules
from metacheck.rules.engine import CheckRun, run_rules

__all__ = [
    "CATALOG",
    "RULE_NAMES",
    "CheckRun",
    "ConfigError",
    "MetacheckConfig",
    "Rule",
    "RuleInput",
    "RuleResult",
    "RuleSkipped",
    "Violation",
    "enabled_rules",
    "load_config",
    "run_rules",
]
