"""iacscan: rule-based security scanner for infrastructure configuration."""

from .block import Attribute, Block, Range
from .cidr import is_open
from .constants import SCAN_VERSION as __version__
from .result import Finding, ResultSet
from .severity import Severity

__all__ = [
    "Attribute",
    "Block",
    "Finding",
    "Range",
    "ResultSet",
    "Severity",
    "__version__",
    "is_open",
]
