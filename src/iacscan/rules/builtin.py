"""Table of rules shipped with iacscan."""

from __future__ import annotations

from typing import Tuple

from .aws.eks.no_public_cluster_access_to_cidr import RULE as _EKS_PUBLIC_CIDR_RULE
from .base import Rule

BUILTIN_RULES: Tuple[Rule, ...] = (_EKS_PUBLIC_CIDR_RULE,)
