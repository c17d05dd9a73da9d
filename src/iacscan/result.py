"""Finding model and the append-only result set rules write into."""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .block import Attribute, Block, Range
from .severity import Severity


@dataclass(frozen=True)
class Finding:
    """One reported misconfiguration. Builders return new instances."""

    rule_id: str
    resource: str
    severity: Severity
    range: Range
    description: str = ""
    title: str = ""
    legacy_id: str = ""
    long_id: str = ""
    resolution: str = ""
    links: Tuple[str, ...] = ()
    attribute_name: Optional[str] = None
    attribute_value: Any = None

    @classmethod
    def new(cls, rule: Any, block: Block) -> "Finding":
        documentation = rule.documentation
        return cls(
            rule_id=rule.id,
            resource=block.full_name(),
            severity=rule.default_severity,
            range=block.range(),
            title=documentation.summary,
            legacy_id=rule.legacy_id,
            long_id=rule.long_id,
            resolution=documentation.resolution,
            links=tuple(documentation.links),
        )

    def with_description(self, description: str) -> "Finding":
        return replace(self, description=description)

    def with_range(self, source_range: Range) -> "Finding":
        return replace(self, range=source_range)

    def with_severity(self, severity: Severity) -> "Finding":
        return replace(self, severity=severity)

    def with_attribute_annotation(self, attribute: Attribute) -> "Finding":
        return replace(self, attribute_name=attribute.name, attribute_value=attribute.value)

    def sort_key(self) -> Tuple[int, str, str, int]:
        return (self.severity.rank, self.rule_id, self.resource, self.range.start_line)

    def to_dict(self) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {}
        if self.attribute_name is not None:
            value = self.attribute_value
            attributes[self.attribute_name] = list(value) if isinstance(value, tuple) else value
        return {
            "id": self.rule_id,
            "legacy_id": self.legacy_id,
            "long_id": self.long_id,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "resource_address": self.resource,
            "location": self.range.to_dict(),
            "attributes": attributes,
            "remediation_hint": self.resolution,
            "links": list(self.links),
        }


class ResultSet:
    """Append-only, thread-safe collection of findings."""

    def __init__(self, findings: Iterable[Finding] = ()) -> None:
        self._lock = threading.Lock()
        self._findings: List[Finding] = list(findings)

    def add(self, finding: Finding) -> None:
        with self._lock:
            self._findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        items = list(findings)
        with self._lock:
            self._findings.extend(items)

    def all(self) -> List[Finding]:
        with self._lock:
            return list(self._findings)

    def __len__(self) -> int:
        with self._lock:
            return len(self._findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.all())
