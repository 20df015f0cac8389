"""Rule evaluation over a thread pool."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from metacheck.logging import get_logger
from metacheck.rules.base import RuleResult, RuleSkipped
from metacheck.rules.catalog import enabled_rules

if TYPE_CHECKING:
    from collections.abc import Sequence

    from metacheck.rules.base import Rule, RuleInput

logger = get_logger("rules")


@dataclass(frozen=True)
class CheckRun:
    """Outcome of one engine pass.

    An incomplete run carries no results: partial results could read as
    conformance.
    """

    results: tuple[RuleResult, ...] = field(default_factory=tuple)
    complete: bool = True


def evaluate_rule(rule: Rule, rule_input: RuleInput) -> RuleResult:
    """Run a single rule, mapping RuleSkipped to a skipped result."""
    try:
        violations = rule.check(rule_input)
    except RuleSkipped as exc:
        logger.debug("rule %s skipped: %s", rule.name, exc.reason)
        return RuleResult(rule=rule.name, status="skipped", reason=exc.reason)

    ordered = tuple(sorted(violations, key=lambda v: v.sort_key()))
    return RuleResult(
        rule=rule.name,
        status="failed" if ordered else "passed",
        violations=ordered,
    )


def run_rules(
    rule_input: RuleInput,
    rules: Sequence[Rule] | None = None,
) -> CheckRun:
    """Evaluate every rule against the same snapshot.

    Rules run concurrently with no ordering between them. The whole run is
    bounded by ``config.timeout_seconds``; on timeout pending rules are
    cancelled and the run is reported incomplete. Exceptions other than
    RuleSkipped propagate.

    A rule already running when the timeout fires cannot be interrupted.
    This call returns without waiting for it, but its worker thread keeps
    running, and interpreter shutdown joins it, so the process does not exit
    before that rule returns.
    """
    config = rule_input.config
    if rules is None:
        rules = enabled_rules(config.disabled_rules)
    if not rules:
        return CheckRun()

    executor = ThreadPoolExecutor(
        max_workers=min(config.max_workers, len(rules)),
        thread_name_prefix="metacheck-rule",
    )
    try:
        futures = [executor.submit(evaluate_rule, rule, rule_input) for rule in rules]
        _done, not_done = wait(futures, timeout=config.timeout_seconds)
        if not_done:
            for future in not_done:
                future.cancel()
            logger.warning(
                "check timed out after %ss with %d of %d rules unfinished",
                config.timeout_seconds,
                len(not_done),
                len(futures),
            )
            return CheckRun(complete=False)
        results = tuple(future.result() for future in futures)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    return CheckRun(results=results)


__all__ = ["CheckRun", "evaluate_rule", "run_rules"]
