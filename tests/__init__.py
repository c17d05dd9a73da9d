"""Test package helpers shared across iacscan suites."""

from __future__ import annotations

CANONICAL_REQUIRED_FIELDS: tuple[str, ...] = (
    "tool",
    "scan_version",
    "canonical_schema_version",
    "findings",
    "severity_totals",
    "resource_count",
    "rules_evaluated",
    "latency_ms",
    "error",
)

FINDING_REQUIRED_FIELDS: tuple[str, ...] = (
    "id",
    "legacy_id",
    "long_id",
    "severity",
    "title",
    "description",
    "resource_address",
    "location",
    "attributes",
    "remediation_hint",
    "links",
)

EKS_RULE_ID = "aws-eks-no-public-cluster-access-to-cidr"
