"""Plan loading and conversion into the Block/Attribute tree."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .block import Attribute, Block, Range
from .errors import PlanLoadError

logger = logging.getLogger(__name__)

_START_LINE_KEY = "__start_line__"
_END_LINE_KEY = "__end_line__"
_ATTRIBUTE_LINES_KEY = "__lines__"
_RESOURCE_META_KEYS = {
    "address",
    "mode",
    "type",
    "name",
    "index",
    "provider_name",
    "schema_version",
    "values",
    "sensitive_values",
    _START_LINE_KEY,
    _END_LINE_KEY,
    _ATTRIBUTE_LINES_KEY,
}


def load_plan(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise PlanLoadError(f"Plan not found: {path}") from None
    except OSError as exc:
        raise PlanLoadError(f"Unable to read plan {path}: {exc}") from exc
    return parse_plan(text, source=str(path))


def parse_plan(text: str, source: str = "<stdin>") -> Dict[str, Any]:
    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PlanLoadError(f"Invalid plan JSON in {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise PlanLoadError("Top-level plan JSON must be an object")
    _validate_plan_schema(data)
    return data


def _validate_plan_schema(plan: Dict[str, Any]) -> None:
    planned_values = plan.get("planned_values")
    if planned_values is None:
        resources = plan.get("resources")
        if resources is not None and not isinstance(resources, list):
            raise PlanLoadError("resources must be a list")
        return
    if not isinstance(planned_values, dict):
        raise PlanLoadError("planned_values must be an object")
    root_module = planned_values.get("root_module")
    if root_module is None:
        raise PlanLoadError("planned_values.root_module must be present")
    _validate_module(root_module, "planned_values.root_module")


def _validate_module(module: Any, path: str) -> None:
    if not isinstance(module, dict):
        raise PlanLoadError(f"{path} must be an object")
    resources = module.get("resources")
    if resources is not None and not isinstance(resources, list):
        raise PlanLoadError(f"{path}.resources must be a list")
    child_modules = module.get("child_modules")
    if child_modules is None:
        return
    if not isinstance(child_modules, list):
        raise PlanLoadError(f"{path}.child_modules must be a list when present")
    for index, child in enumerate(child_modules):
        _validate_module(child, f"{path}.child_modules[{index}]")


def build_blocks(plan: Mapping[str, Any], filename: str = "") -> List[Block]:
    """Return one ``resource`` block per resource in the plan, in document order."""

    planned_values = plan.get("planned_values")
    if isinstance(planned_values, dict):
        root_module = planned_values.get("root_module") or {}
        blocks = _module_blocks(root_module, filename)
    else:
        blocks = [
            _resource_block(resource, filename, module_address="")
            for resource in plan.get("resources") or []
            if isinstance(resource, dict)
        ]
    logger.debug("Built %d resource blocks from %s", len(blocks), filename or "<plan>")
    return blocks


def _module_blocks(module: Mapping[str, Any], filename: str) -> List[Block]:
    module_address = str(module.get("address") or "")
    blocks: List[Block] = []
    for resource in module.get("resources") or []:
        if not isinstance(resource, dict):
            continue
        if resource.get("mode", "managed") != "managed":
            continue
        blocks.append(_resource_block(resource, filename, module_address))
    for child in module.get("child_modules") or []:
        blocks.extend(_module_blocks(child, filename))
    return blocks


def _resource_block(resource: Mapping[str, Any], filename: str, module_address: str) -> Block:
    values = resource.get("values")
    if not isinstance(values, dict):
        values = {key: value for key, value in resource.items() if key not in _RESOURCE_META_KEYS}
    name = str(resource.get("name") or "")
    index = resource.get("index")
    if index is not None:
        name = f"{name}[{json.dumps(index)}]"
    labels = (str(resource.get("type") or ""), name)
    return _build_block("resource", labels, values, _range_of(resource, filename), filename, module_address)


def _build_block(
    block_type: str,
    labels: tuple,
    values: Mapping[str, Any],
    block_range: Range,
    filename: str,
    module_address: str = "",
) -> Block:
    attributes: Dict[str, Attribute] = {}
    children: List[Block] = []
    attribute_lines = values.get(_ATTRIBUTE_LINES_KEY)
    if not isinstance(attribute_lines, dict):
        attribute_lines = {}
    for key, value in values.items():
        if key in (_START_LINE_KEY, _END_LINE_KEY, _ATTRIBUTE_LINES_KEY) or value is None:
            continue
        if _is_block_list(value):
            for item in value:
                children.append(
                    _build_block(key, (), item, _range_of(item, filename, block_range), filename)
                )
            continue
        attribute_range = _attribute_range(attribute_lines.get(key), filename, block_range)
        attributes[key] = Attribute(name=key, value=value, source_range=attribute_range)
    return Block(
        type=block_type,
        labels=labels,
        attributes=attributes,
        children=tuple(children),
        source_range=block_range,
        module_address=module_address,
    )


def _is_block_list(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(item, dict) for item in value)


def _range_of(node: Mapping[str, Any], filename: str, parent: Optional[Range] = None) -> Range:
    start = _as_line(node.get(_START_LINE_KEY))
    end = _as_line(node.get(_END_LINE_KEY))
    if start is None:
        if parent is not None:
            return parent
        return Range(filename=filename)
    return Range(filename=filename, start_line=start, end_line=end if end is not None else start)


def _attribute_range(lines: Any, filename: str, parent: Range) -> Range:
    """Resolve a ``[start, end]`` pair from a ``__lines__`` map, else ``parent``."""

    if not isinstance(lines, (list, tuple)) or not lines:
        return parent
    start = _as_line(lines[0])
    if start is None:
        return parent
    end = _as_line(lines[1]) if len(lines) > 1 else None
    return Range(filename=filename, start_line=start, end_line=end if end is not None else start)


def _as_line(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        line = int(value)
    except (TypeError, ValueError):
        return None
    return line if line >= 0 else None
