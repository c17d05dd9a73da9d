"""Severity levels shared by rules, findings, and reporters."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Severity(str, Enum):
    """Closed, ordered severity taxonomy (most severe first)."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @classmethod
    def parse(cls, text: str) -> "Severity":
        normalized = str(text).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown severity {text!r}; expected one of: {allowed}")

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER.index(self)

    def at_least(self, other: "Severity") -> bool:
        return self.rank <= other.rank

    def __str__(self) -> str:
        return self.value


SEVERITY_ORDER: Tuple[Severity, ...] = tuple(Severity)
