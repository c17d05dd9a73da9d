"""Shared constants for iacscan."""

TOOL_NAME = "iacscan"
SCAN_VERSION = "0.1.0"
CANONICAL_SCHEMA_VERSION = "1.0.0"

EXIT_OK = 0
EXIT_INVALID_INPUT = 2
EXIT_FINDINGS = 3

RULE_ERROR_ID = "iacscan-rule-error"
