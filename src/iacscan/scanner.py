"""Dispatch resource blocks to matching rules and collect their findings."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .block import Block
from .config import ScanConfig
from .constants import RULE_ERROR_ID
from .errors import ConfigError, RuleExecutionError
from .result import Finding, ResultSet
from .rules import Rule, RuleRegistry, default_registry
from .severity import Severity

logger = logging.getLogger(__name__)


class Scanner:
    """Evaluates every applicable rule against every resource block.

    Rules never share state, so blocks may be evaluated on a worker pool.
    Each worker writes to its own result set and the sets are merged in block
    order, which keeps the output identical to a serial run.
    """

    def __init__(self, registry: Optional[RuleRegistry] = None, config: Optional[ScanConfig] = None) -> None:
        self.registry = registry or default_registry()
        self.config = config or ScanConfig()
        try:
            self.rules: List[Rule] = self.registry.select(
                include=self.config.include_rules,
                exclude=self.config.exclude_rules,
            )
        except KeyError as exc:
            raise ConfigError(f"Unknown rule id: {exc.args[0]}") from exc

    def scan(self, blocks: Sequence[Block]) -> ResultSet:
        logger.info("Scanning %d resources with %d rules", len(blocks), len(self.rules))
        if self.config.workers > 1 and len(blocks) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                partials = list(pool.map(self._scan_block, blocks))
        else:
            partials = [self._scan_block(block) for block in blocks]

        findings: List[Finding] = []
        for partial in partials:
            findings.extend(
                finding
                for finding in partial
                if finding.rule_id == RULE_ERROR_ID
                or finding.severity.at_least(self.config.minimum_severity)
            )
        findings.sort(key=Finding.sort_key)
        logger.info("Scan finished with %d findings", len(findings))
        return ResultSet(findings)

    def _scan_block(self, block: Block) -> ResultSet:
        result_set = ResultSet()
        for rule in self.rules:
            if not rule.applies_to(block):
                continue
            logger.debug("Evaluating %s against %s", rule.id, block.full_name())
            try:
                rule.evaluate(block, result_set)
            except Exception as exc:  # noqa: BLE001  # pylint: disable=broad-except
                if self.config.strict:
                    raise RuleExecutionError(rule.id, block.full_name(), str(exc)) from exc
                logger.exception("Rule %s failed on %s", rule.id, block.full_name())
                result_set.add(_rule_error_finding(rule, block, exc))
        return result_set


def _rule_error_finding(rule: Rule, block: Block, exc: Exception) -> Finding:
    return Finding(
        rule_id=RULE_ERROR_ID,
        long_id=RULE_ERROR_ID,
        resource=block.full_name(),
        severity=Severity.HIGH,
        range=block.range(),
        title="Rule execution error",
        description=f"Rule {rule.id} could not evaluate this resource: {exc}",
    )
