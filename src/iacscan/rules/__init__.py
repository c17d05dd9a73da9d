"""Rule registry for the iacscan pipeline.

Rules are registered explicitly: ``default_registry()`` builds a fresh
registry from the ``BUILTIN_RULES`` table instead of relying on import-time
side effects.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .base import CheckFunc, Rule, RuleDocumentation
from .builtin import BUILTIN_RULES


class RuleRegistry:
    """In-memory registry keyed by rule id."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: Dict[str, Rule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: Rule) -> Rule:
        if rule.id in self._rules:
            raise ValueError(f"Duplicate rule id registered: {rule.id}")
        self._rules[rule.id] = rule
        return rule

    def all(self) -> List[Rule]:
        return [self._rules[rule_id] for rule_id in sorted(self._rules)]

    def get(self, rule_id: str) -> Rule:
        rule = self._lookup(rule_id)
        if rule is None:
            raise KeyError(rule_id)
        return rule

    def select(self, include: Iterable[str] = (), exclude: Iterable[str] = ()) -> List[Rule]:
        """Return registered rules filtered by id or legacy id."""

        included = {self.get(rule_id).id for rule_id in include}
        excluded = {self.get(rule_id).id for rule_id in exclude}
        selected: List[Rule] = []
        for rule in self.all():
            if included and rule.id not in included:
                continue
            if rule.id in excluded:
                continue
            selected.append(rule)
        return selected

    def manifest(self) -> List[Dict[str, Any]]:
        """Return deterministic manifest entries for every registered rule."""

        return [
            {
                "id": rule.id,
                "legacy_id": rule.legacy_id,
                "long_id": rule.long_id,
                "severity": rule.default_severity.value,
                "provider": rule.provider,
                "service": rule.service,
                "summary": rule.documentation.summary,
                "python_module": getattr(rule.check, "__module__", ""),
            }
            for rule in self.all()
        ]

    def __len__(self) -> int:
        return len(self._rules)

    def _lookup(self, rule_id: str) -> Optional[Rule]:
        if rule_id in self._rules:
            return self._rules[rule_id]
        for rule in self._rules.values():
            if rule.legacy_id and rule.legacy_id == rule_id:
                return rule
        return None


def default_registry() -> RuleRegistry:
    return RuleRegistry(BUILTIN_RULES)


__all__ = [
    "BUILTIN_RULES",
    "CheckFunc",
    "Rule",
    "RuleDocumentation",
    "RuleRegistry",
    "default_registry",
]
