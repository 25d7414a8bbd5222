"""Map raw strength scores onto the labels shown to the user."""
from __future__ import annotations

from .const import STRENGTH_BUCKETS, STRENGTH_OVERKILL


def strength_label(score: float) -> tuple[str, str]:
    """Return (label, tier) for a strength score."""
    for bound, label, tier in STRENGTH_BUCKETS:
        if score < bound:
            return label, tier
    return STRENGTH_OVERKILL


def strength_fraction(score: float) -> float:
    """Clamp a score to [0, 1] for progress-bar style display."""
    return min(1.0, max(0.0, score))


def describe(score: float) -> dict:
    label, tier = strength_label(score)
    return {
        "score": round(score, 6),
        "fraction": round(strength_fraction(score), 6),
        "label": label,
        "tier": tier,
    }
