"""Rule descriptors evaluated by the scanner."""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass
from typing import Callable, Tuple

from ..block import Block
from ..result import ResultSet
from ..severity import Severity

CheckFunc = Callable[[ResultSet, Block], None]


@dataclass(frozen=True)
class RuleDocumentation:
    summary: str
    impact: str = ""
    resolution: str = ""
    explanation: str = ""
    bad_example: str = ""
    good_example: str = ""
    links: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Rule:
    """A named decision procedure over a single configuration block.

    ``check`` receives the caller's result set and the block, and appends at
    most the findings it detects. It must not keep state between calls.
    """

    legacy_id: str
    provider: str
    service: str
    short_code: str
    documentation: RuleDocumentation
    check: CheckFunc
    default_severity: Severity = Severity.MEDIUM
    required_types: Tuple[str, ...] = ()
    required_labels: Tuple[str, ...] = ()

    @property
    def long_id(self) -> str:
        return f"{self.provider}-{self.service}-{self.short_code}"

    @property
    def id(self) -> str:
        return self.long_id

    def applies_to(self, block: Block) -> bool:
        if self.required_types and block.type not in self.required_types:
            return False
        if not self.required_labels:
            return True
        label = block.type_label()
        return any(fnmatch.fnmatchcase(label, pattern) for pattern in self.required_labels)

    def evaluate(self, block: Block, result_set: ResultSet) -> None:
        self.check(result_set, block)
