"""Scan configuration sourced from environment flags and CLI options."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional, Tuple

from .errors import ConfigError
from .severity import Severity

_TRUTHY = {"1", "true", "yes", "on"}
_FALSEY = {"0", "false", "no", "off"}


def env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def env_falsey(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _FALSEY


def _split_ids(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _parse_workers(value: Optional[str]) -> int:
    if value is None or not value.strip():
        return 1
    try:
        workers = int(value)
    except ValueError:
        raise ConfigError(f"IACSCAN_WORKERS must be an integer, got {value!r}") from None
    if workers < 1:
        raise ConfigError(f"IACSCAN_WORKERS must be at least 1, got {workers}")
    return workers


def _parse_severity(value: Optional[str]) -> Severity:
    if value is None or not value.strip():
        return Severity.INFO
    try:
        return Severity.parse(value)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


@dataclass(frozen=True)
class ScanConfig:
    strict: bool = False
    workers: int = 1
    minimum_severity: Severity = Severity.INFO
    include_rules: Tuple[str, ...] = ()
    exclude_rules: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScanConfig":
        env = os.environ if environ is None else environ
        return cls(
            strict=env_truthy(env.get("IACSCAN_STRICT")),
            workers=_parse_workers(env.get("IACSCAN_WORKERS")),
            minimum_severity=_parse_severity(env.get("IACSCAN_MIN_SEVERITY")),
            include_rules=_split_ids(env.get("IACSCAN_INCLUDE_RULES")),
            exclude_rules=_split_ids(env.get("IACSCAN_EXCLUDE_RULES")),
        )

    def merged(
        self,
        *,
        strict: Optional[bool] = None,
        workers: Optional[int] = None,
        minimum_severity: Optional[str] = None,
        include_rules: Iterable[str] = (),
        exclude_rules: Iterable[str] = (),
    ) -> "ScanConfig":
        """Return a copy with explicitly supplied values taking precedence."""

        updated = self
        if strict is not None:
            updated = replace(updated, strict=strict)
        if workers is not None:
            updated = replace(updated, workers=_parse_workers(str(workers)))
        if minimum_severity is not None:
            updated = replace(updated, minimum_severity=_parse_severity(minimum_severity))
        include = tuple(include_rules)
        if include:
            updated = replace(updated, include_rules=include)
        exclude = tuple(exclude_rules)
        if exclude:
            updated = replace(updated, exclude_rules=exclude)
        return updated
