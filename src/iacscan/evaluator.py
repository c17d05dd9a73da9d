"""Canonical scan payload built from a loaded plan."""

from __future__ import annotations

import os
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from .config import ScanConfig
from .constants import CANONICAL_SCHEMA_VERSION, SCAN_VERSION, TOOL_NAME
from .loader import build_blocks
from .result import Finding
from .rules import RuleRegistry
from .scanner import Scanner
from .severity import SEVERITY_ORDER


def evaluate_plan(plan: Dict[str, Any]) -> Dict[str, Any]:
    """Convenience wrapper around ``run_scan`` with default configuration."""

    return run_scan(plan=plan)


def run_scan(
    plan: Dict[str, Any],
    *,
    source_path: Optional[Path] = None,
    config: Optional[ScanConfig] = None,
    registry: Optional[RuleRegistry] = None,
) -> Dict[str, Any]:
    """Produce the canonical payload for every resource in ``plan``."""

    start = perf_counter()
    filename = str(source_path) if source_path else ""
    blocks = build_blocks(plan if isinstance(plan, dict) else {}, filename=filename)
    scanner = Scanner(registry=registry, config=config)
    findings = scanner.scan(blocks).all()

    payload = _build_base_payload(
        findings=findings,
        severity_totals=_severity_totals(findings),
        resource_count=len(blocks),
        rules_evaluated=[rule.id for rule in scanner.rules],
        error=None,
    )
    payload["latency_ms"] = _measure_latency_ms(start)
    return _sort_payload(payload)


def build_fatal_error_output(message: str) -> Dict[str, Any]:
    payload = _build_base_payload(
        findings=[],
        severity_totals=_severity_totals([]),
        resource_count=0,
        rules_evaluated=[],
        error=message,
    )
    return _sort_payload(payload)


def _build_base_payload(
    *,
    findings: List[Finding],
    severity_totals: Dict[str, int],
    resource_count: int,
    rules_evaluated: List[str],
    error: Optional[str],
) -> Dict[str, Any]:
    return {
        "tool": TOOL_NAME,
        "scan_version": SCAN_VERSION,
        "canonical_schema_version": CANONICAL_SCHEMA_VERSION,
        "findings": [finding.to_dict() for finding in findings],
        "severity_totals": severity_totals,
        "resource_count": resource_count,
        "rules_evaluated": rules_evaluated,
        "latency_ms": 0,
        "error": error,
    }


def _severity_totals(findings: List[Finding]) -> Dict[str, int]:
    totals = {severity.value: 0 for severity in SEVERITY_ORDER}
    for finding in findings:
        totals[finding.severity.value] += 1
    return totals


def _measure_latency_ms(start: float) -> int:
    forced = os.getenv("IACSCAN_FORCE_DURATION_MS")
    if forced and forced.strip().isdigit():
        return int(forced)
    elapsed = perf_counter() - start
    return max(int(elapsed * 1000), 0)


def _sort_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: payload[key] for key in sorted(payload.keys())}
