"""
Display tiers for complexity labels.

Labels may come from the remote model as free text, so the tier is picked
by substring matching rather than by exact label.
"""

from typing import Literal

ComplexityTier = Literal["fast", "linear", "slow", "critical"]

TIER_COLORS: dict[str, str] = {
    "fast": "#4ec9b0",
    "linear": "#dcdcaa",
    "slow": "#ce9178",
    "critical": "#f48771",
}


def complexity_tier(label: str) -> ComplexityTier:
    """Map a Big-O label to a display tier."""
    if "O(1)" in label or "O(log n)" in label:
        return "fast"
    if "O(n)" in label and "²" not in label:
        return "linear"
    if "O(n²)" in label or "O(n log n)" in label:
        return "slow"
    return "critical"


def complexity_color(label: str) -> str:
    return TIER_COLORS[complexity_tier(label)]
