"""Human-readable rendering helpers for iacscan CLI output."""

from __future__ import annotations

from typing import Any, Dict, List

from .severity import SEVERITY_ORDER


def render_human_readable(output: Dict[str, Any]) -> str:
    """Return a deterministic text block describing scan findings."""

    findings = output.get("findings") or []
    lines: List[str] = []

    lines.append(f"Scan completed for {output.get('tool', 'iacscan')}")
    lines.append("-")

    if not findings:
        lines.append("No problems detected.")
        return "\n".join(lines)

    for finding in findings:
        lines.extend(_render_finding_block(finding))

    return "\n".join(lines)


def _render_finding_block(finding: Dict[str, Any]) -> List[str]:
    block: List[str] = []
    finding_id = finding.get("id", "UNKNOWN")
    severity = str(finding.get("severity", "unknown")).upper()
    block.append(f"[{finding_id}] {finding.get('description', '')} ({severity})")
    block.append(f"  Resource: {finding.get('resource_address') or '-'}")
    block.append(f"  Location: {_render_location(finding.get('location'))}")
    attributes = finding.get("attributes")
    if isinstance(attributes, dict):
        for name, value in attributes.items():
            block.append(f"  Attribute: {name} = {value}")
    block.append(f"  Remediation: {finding.get('remediation_hint') or 'N/A'}")
    return block


def _render_location(location: Any) -> str:
    if not isinstance(location, dict):
        return "-"
    filename = location.get("filename") or "<plan>"
    start = location.get("start_line") or 0
    end = location.get("end_line") or start
    if not start:
        return filename
    if start == end:
        return f"{filename}:{start}"
    return f"{filename}:{start}-{end}"


def render_severity_summary(output: Dict[str, Any]) -> str:
    source = output.get("severity_totals") or {}
    counts: Dict[str, int] = {}
    for severity in SEVERITY_ORDER:
        try:
            counts[severity.value] = int(source.get(severity.value, 0))
        except (TypeError, ValueError):
            counts[severity.value] = 0

    total = sum(counts.values())

    lines = ["Summary:"]
    for key, count in counts.items():
        percentage = 0
        if total > 0:
            percentage = int(round((count / total) * 100))
        lines.append(f"  {key}: {count} ({percentage}%)")
    return "\n".join(lines)
