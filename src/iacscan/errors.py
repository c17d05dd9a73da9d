"""Exception hierarchy for iacscan."""

from __future__ import annotations


class IacScanError(Exception):
    """Base class for every error raised by iacscan."""


class PlanLoadError(IacScanError):
    """Raised when a plan document cannot be read or fails structural validation."""


class ConfigError(IacScanError):
    """Raised for invalid configuration values from the environment or CLI."""


class RuleExecutionError(IacScanError):
    """Raised in strict mode when a rule fails while evaluating a resource."""

    def __init__(self, rule_id: str, resource: str, message: str) -> None:
        super().__init__(f"Rule {rule_id} failed on {resource}: {message}")
        self.rule_id = rule_id
        self.resource = resource
