"""CIDR classification helpers used by network exposure rules."""

from __future__ import annotations

import ipaddress
import logging
from typing import Any, List

from .block import Attribute

logger = logging.getLogger(__name__)


def _parse_network(entry: Any):
    if not isinstance(entry, str):
        return None
    text = entry.strip()
    if not text or "/" not in text:
        return None
    try:
        return ipaddress.ip_network(text, strict=False)
    except ValueError:
        return None


def is_open_cidr(entry: Any) -> bool:
    """Return True when ``entry`` covers the entire IPv4 or IPv6 address space."""

    network = _parse_network(entry)
    if network is None:
        logger.debug("Ignoring unparsable CIDR entry %r", entry)
        return False
    return network.prefixlen == 0


def is_open(attribute: Attribute) -> bool:
    """Return True when any CIDR held by ``attribute`` is fully open.

    An empty list is not open. Malformed entries are skipped and the remaining
    entries are still checked.
    """

    return any(is_open_cidr(entry) for entry in attribute.values())


def unparsable_cidrs(attribute: Attribute) -> List[str]:
    return [str(entry) for entry in attribute.values() if _parse_network(entry) is None]
