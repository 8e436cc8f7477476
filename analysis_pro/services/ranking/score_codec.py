"""
Score codec: agent score strings -> display percentages and badge categories.

The agent reports scores either as numbers out of ten ("7.5", "8.2/10") or as
qualitative labels ("Excellent"). Nothing here raises; bad input maps to a
fixed fallback.
"""

from ...models.view_state import Recommendation
from ...shared.formatters import parse_leading_number

PILLAR_LABEL_PERCENT: dict[str, float] = {
    "Excellent": 95.0,
    "Very Good": 85.0,
    "Strong": 80.0,
    "Good": 70.0,
    "Moderate": 60.0,
    "Solid (hard asset)": 75.0,
    "Index-based": 85.0,
    "N/A": 0.0,
}

UNRECOGNIZED_LABEL_PERCENT = 50.0
UNPARSEABLE_SCORE_PERCENT = 0.0

_RECOMMENDATIONS = {
    "buy": Recommendation.BUY,
    "hold": Recommendation.HOLD,
    "sell": Recommendation.SELL,
}


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def _score_out_of_ten(score: str | float | int | None) -> float | None:
    number = parse_leading_number(score)
    if number is None:
        return None
    return _clamp_percent(number / 10 * 100)


def to_display_percent(score: str | float | int | None) -> float:
    """
    Convert a score to a progress-bar percentage in [0, 100].

    Args:
        score: Numeric score out of 10, or a known pillar label

    Returns:
        Percentage; 0 for anything unparseable

    Examples:
        >>> to_display_percent("7.5")
        75.0
        >>> to_display_percent("Excellent")
        95.0
        >>> to_display_percent("garbage")
        0.0
    """
    if isinstance(score, str) and score.strip() in PILLAR_LABEL_PERCENT:
        return PILLAR_LABEL_PERCENT[score.strip()]
    percent = _score_out_of_ten(score)
    return UNPARSEABLE_SCORE_PERCENT if percent is None else percent


def pillar_to_percent(label: str | float | int | None) -> float:
    """
    Convert a pillar sub-score to a percentage.

    Labels the table does not know are shown at the midpoint rather than as
    zero, since they are usually valid qualitative grades.

    Examples:
        >>> pillar_to_percent("Strong")
        80.0
        >>> pillar_to_percent("Above Average")
        50.0
    """
    if isinstance(label, str) and label.strip() in PILLAR_LABEL_PERCENT:
        return PILLAR_LABEL_PERCENT[label.strip()]
    percent = _score_out_of_ten(label)
    return UNRECOGNIZED_LABEL_PERCENT if percent is None else percent


def recommendation_category(recommendation: str | None) -> Recommendation:
    """Map free-text recommendation to a badge category (case-insensitive)."""
    if not recommendation:
        return Recommendation.OTHER
    return _RECOMMENDATIONS.get(recommendation.strip().lower(), Recommendation.OTHER)
