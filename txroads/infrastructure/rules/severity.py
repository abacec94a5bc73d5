"""Congestion severity tiers keyed by the travel time index."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SeverityTier:
    """A half-open ``[low, high)`` band of congestion index values."""

    label: str
    low: float
    high: float
    color: str

    def contains(self, congestion_index: float) -> bool:
        return self.low <= congestion_index < self.high


SEVERITY_TIERS: tuple[SeverityTier, ...] = (
    SeverityTier(label="Low", low=0.0, high=1.0, color="#4ade80"),
    SeverityTier(label="Medium", low=1.0, high=1.5, color="#facc15"),
    SeverityTier(label="High", low=1.5, high=2.0, color="#f87171"),
    SeverityTier(label="Severe", low=2.0, high=2.5, color="#ef4444"),
    SeverityTier(label="Extreme", low=2.5, high=math.inf, color="#b91c1c"),
)

SEVERITY_LABELS: tuple[str, ...] = tuple(tier.label for tier in SEVERITY_TIERS)


def severity_tier(congestion_index: float) -> Optional[SeverityTier]:
    """Return the first tier containing ``congestion_index``.

    Negative and NaN values match no tier and yield ``None``.
    """
    for tier in SEVERITY_TIERS:
        if tier.contains(congestion_index):
            return tier
    return None


def classify_severity(congestion_index: float) -> Optional[str]:
    tier = severity_tier(congestion_index)
    return tier.label if tier is not None else None


def congestion_color(congestion_index: float) -> str:
    """Map a congestion index to its map color.

    Uses upper bounds only, so negatives fall in the lowest tier and NaN in the
    highest one.
    """
    for tier in SEVERITY_TIERS[:-1]:
        if congestion_index < tier.high:
            return tier.color
    return SEVERITY_TIERS[-1].color


__all__ = [
    "SEVERITY_LABELS",
    "SEVERITY_TIERS",
    "SeverityTier",
    "classify_severity",
    "congestion_color",
    "severity_tier",
]
