"""Global pytest configuration for iacscan tests."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_ROOT = _REPO_ROOT / "src"

# Allow running the suite from a checkout without installing the package.
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

_STABLE_DURATION_MS = "123"
_SCAN_ENV_FLAGS = (
    "IACSCAN_STRICT",
    "IACSCAN_WORKERS",
    "IACSCAN_MIN_SEVERITY",
    "IACSCAN_INCLUDE_RULES",
    "IACSCAN_EXCLUDE_RULES",
)


@pytest.fixture(autouse=True)
def _isolated_scan_environment(monkeypatch):
    """Keep scan flags from the outer environment out of every test."""

    for name in _SCAN_ENV_FLAGS:
        monkeypatch.delenv(name, raising=False)
    if not os.getenv("IACSCAN_FORCE_DURATION_MS"):
        monkeypatch.setenv("IACSCAN_FORCE_DURATION_MS", _STABLE_DURATION_MS)

    # The CLI binds a handler to the stderr stream of each CliRunner invocation.
    logger = logging.getLogger("iacscan")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]
