from __future__ import annotations

from typing import Optional

# Multipliers applied to the catalog baseline.
TIME_ADJUSTMENT_MULTIPLIERS = {
    "much_less": 0.5,
    "less": 0.75,
    "about_right": 1.0,
    "more": 1.25,
    "much_more": 1.5,
}

TIME_ADJUSTMENT_ORDER = list(TIME_ADJUSTMENT_MULTIPLIERS)

TIME_ADJUSTMENT_LABELS = {
    "much_less": "Much Less (-50%)",
    "less": "Less (-25%)",
    "about_right": "About Right",
    "more": "More (+25%)",
    "much_more": "Much More (+50%)",
}

TIME_ADJUSTMENT_SHORT_LABELS = {
    "much_less": "-50%",
    "less": "-25%",
    "about_right": "Baseline",
    "more": "+25%",
    "much_more": "+50%",
}

_EXPLANATIONS = {
    "much_less": "significantly less time in your household than",
    "less": "somewhat less time in your household than",
    "about_right": "about the same time as",
    "more": "somewhat more time in your household than",
    "much_more": "significantly more time in your household than",
}


def adjusted_minutes(baseline_minutes: float, adjustment: Optional[str]) -> int:
    # Unknown tags are treated as about_right.
    multiplier = TIME_ADJUSTMENT_MULTIPLIERS.get(adjustment or "", 1.0)
    # Round half up, not Python's banker's rounding.
    return int(baseline_minutes * multiplier + 0.5)


def effective_minutes(response, baseline_minutes: float) -> float:
    """Weekly minutes for a response.

    Precedence: time_adjustment, then the legacy estimated_minutes field,
    then the catalog baseline.
    """
    adjustment = getattr(response, "time_adjustment", None)
    if adjustment:
        return adjusted_minutes(baseline_minutes, adjustment)

    estimated = getattr(response, "estimated_minutes", None)
    if estimated is not None:
        return estimated

    return baseline_minutes


def label(adjustment: Optional[str], short: bool = False) -> str:
    table = TIME_ADJUSTMENT_SHORT_LABELS if short else TIME_ADJUSTMENT_LABELS
    return table.get(adjustment or "", table["about_right"])


def variation_explanation(adjustment: Optional[str]) -> str:
    phrase = _EXPLANATIONS.get(adjustment or "", _EXPLANATIONS["about_right"])
    return f"This task takes {phrase} typical research estimates."


def format_minutes(total_minutes: float) -> str:
    hours = int(total_minutes // 60)
    minutes = int(round(total_minutes % 60))
    if minutes == 60:
        hours, minutes = hours + 1, 0

    if hours == 0:
        return f"{minutes}min"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}min"
