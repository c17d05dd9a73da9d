"""Read-only accessor over parsed configuration blocks and attributes.

Lookups by name never raise: a missing nested block or attribute is returned
as ``None`` so rules can branch on absence explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Range:
    filename: str = ""
    start_line: int = 0
    end_line: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "start_line": self.start_line,
            "end_line": self.end_line,
        }

    def __str__(self) -> str:
        return f"{self.filename}:{self.start_line}-{self.end_line}"


@dataclass(frozen=True)
class Attribute:
    """A named value attached to a block."""

    name: str
    value: Any
    source_range: Range = field(default_factory=Range)

    def __post_init__(self) -> None:
        if isinstance(self.value, list):
            object.__setattr__(self, "value", tuple(self.value))

    def range(self) -> Range:
        return self.source_range

    def is_true(self) -> bool:
        if isinstance(self.value, bool):
            return self.value
        if isinstance(self.value, str):
            return self.value.strip().lower() == "true"
        return False

    def is_false(self) -> bool:
        if isinstance(self.value, bool):
            return not self.value
        if isinstance(self.value, str):
            return self.value.strip().lower() == "false"
        return False

    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def is_iterable(self) -> bool:
        return isinstance(self.value, tuple)

    def values(self) -> Tuple[Any, ...]:
        """Return the value as a sequence; a scalar becomes a one-item tuple."""

        if isinstance(self.value, tuple):
            return self.value
        return (self.value,)


@dataclass(frozen=True, eq=False)
class Block:
    """One configuration block instance with nested blocks and attributes.

    Blocks compare and hash by identity; the attribute mapping is read-only.
    """

    type: str
    labels: Tuple[str, ...] = ()
    attributes: Mapping[str, Attribute] = field(default_factory=dict)
    children: Tuple["Block", ...] = ()
    source_range: Range = field(default_factory=Range)
    module_address: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", tuple(self.labels))
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def build(
        cls,
        block_type: str,
        labels: Iterable[str] = (),
        *,
        attributes: Optional[Mapping[str, Any]] = None,
        children: Iterable["Block"] = (),
        source_range: Optional[Range] = None,
        module_address: str = "",
    ) -> "Block":
        """Construct a block from plain attribute values.

        Every attribute inherits ``source_range`` unless an ``Attribute`` is
        passed in directly.
        """

        block_range = source_range or Range()
        resolved: Dict[str, Attribute] = {}
        for name, value in (attributes or {}).items():
            if isinstance(value, Attribute):
                resolved[name] = value
            else:
                resolved[name] = Attribute(name=name, value=value, source_range=block_range)
        return cls(
            type=block_type,
            labels=tuple(labels),
            attributes=resolved,
            children=tuple(children),
            source_range=block_range,
            module_address=module_address,
        )

    def range(self) -> Range:
        return self.source_range

    def get_attribute(self, name: str) -> Optional[Attribute]:
        return self.attributes.get(name)

    def get_block(self, name: str) -> Optional["Block"]:
        for child in self.children:
            if child.type == name:
                return child
        return None

    def get_blocks(self, name: str) -> Tuple["Block", ...]:
        return tuple(child for child in self.children if child.type == name)

    def has_child(self, name: str) -> bool:
        return self.get_attribute(name) is not None or self.get_block(name) is not None

    def missing_child(self, name: str) -> bool:
        return not self.has_child(name)

    def type_label(self) -> str:
        return self.labels[0] if self.labels else ""

    def name_label(self) -> str:
        return self.labels[1] if len(self.labels) > 1 else ""

    def full_name(self) -> str:
        name = ".".join(self.labels) if self.labels else self.type
        if self.module_address:
            return f"{self.module_address}.{name}"
        return name
