from __future__ import annotations

"""
Map risk percentages and free-text tier words onto ordinal risk tiers.

Design intent:
- Keep thresholds numeric and inclusive at each tier's lower bound.
- Never coerce an unrecognized tier word into a default tier.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, TypeVar


class RiskTier(str, Enum):
    """Cardiovascular risk tiers, ordered low to high."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


HIGH_THRESHOLD_PERCENT = 20.0
MODERATE_THRESHOLD_PERCENT = 5.0

_T = TypeVar("_T")


def ensure_tier_table(table: Mapping[RiskTier, _T], name: str) -> Mapping[RiskTier, _T]:
    """Freeze a tier-keyed table, failing at import time if a tier is missing."""
    missing = [tier.value for tier in RiskTier if tier not in table]
    if missing:
        raise RuntimeError(f"{name} is missing tiers: {', '.join(missing)}")
    return MappingProxyType(dict(table))


_TIER_LABELS = ensure_tier_table(
    {
        RiskTier.LOW: "Low",
        RiskTier.MODERATE: "Moderate",
        RiskTier.HIGH: "High",
    },
    "_TIER_LABELS",
)


def tier_from_percent(percent: float) -> RiskTier:
    if percent >= HIGH_THRESHOLD_PERCENT:
        return RiskTier.HIGH
    if percent >= MODERATE_THRESHOLD_PERCENT:
        return RiskTier.MODERATE
    return RiskTier.LOW


def tier_from_keyword(text: str | None) -> RiskTier | None:
    """
    Resolve a loose tier word ("High", "medium", "mild", ...) to a tier.

    Checks run high, moderate, low, so "moderately severe" resolves to HIGH.
    Returns None when nothing matches.
    """
    value = str(text or "").strip().lower()
    if not value:
        return None
    if value.startswith("h") or "severe" in value:
        return RiskTier.HIGH
    if value.startswith("m") or "medium" in value:
        return RiskTier.MODERATE
    if value.startswith("l") or "mild" in value:
        return RiskTier.LOW
    return None


def tier_label(tier: RiskTier) -> str:
    return _TIER_LABELS[RiskTier(tier)]
