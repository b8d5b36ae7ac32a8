"""
Indicator normalization.

Each indicator is min-max scaled over the fetched window to a 0-100 position:
  pos(v) = clamp((v - min) / (max - min) * 100, 0, 100)
A flat window (max == min) puts every point at 50. Inverse indicators
(lower is better: unemployment, Gini, CO2) score 100 - pos(v).

Latest and previous points are scored against the same window, so delta
tracks movement within a fixed range rather than a re-based scale.
"""
import math

import numpy as np

from app.schemas.worldbank import DataPoint, NormalizedIndicator


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves toward +infinity (2.5 -> 3, -2.5 -> -2) instead of to even."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def min_max_norm(value: float, min_value: float, max_value: float) -> float:
    """Position of value within [min_value, max_value] on a 0-100 scale."""
    value_range = max_value - min_value
    if value_range <= 0:
        return 50.0
    return clamp((value - min_value) / value_range * 100)


def to_score(value: float, min_value: float, max_value: float, inverse: bool) -> float:
    raw = min_max_norm(value, min_value, max_value)
    return 100 - raw if inverse else raw


def get_min_max(values: list[float]) -> tuple[float, float]:
    """Min and max over the finite values; (0, 1) when there are none."""
    arr = np.asarray(values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return 0.0, 1.0
    return float(arr.min()), float(arr.max())


def normalize_indicator(
    indicator: str,
    label: str,
    values: list[DataPoint],
    inverse: bool = False,
) -> NormalizedIndicator:
    numeric = [p for p in values if math.isfinite(p.value)]
    if not numeric:
        return NormalizedIndicator(indicator=indicator, label=label, values=[], score=0)

    min_value, max_value = get_min_max([p.value for p in numeric])

    # Stable sort keeps input order for duplicate years
    by_year = sorted(numeric, key=lambda p: int(p.year), reverse=True)
    latest = by_year[0]
    previous = by_year[1] if len(by_year) > 1 else None

    latest_score = to_score(latest.value, min_value, max_value, inverse)
    previous_score = None
    delta = None
    if previous is not None:
        previous_score = to_score(previous.value, min_value, max_value, inverse)
        delta = round_half_up(latest_score - previous_score, 1)

    return NormalizedIndicator(
        indicator=indicator,
        label=label,
        values=numeric,
        latest_year=latest.year,
        latest_value=latest.value,
        score=int(round_half_up(latest_score)),
        previous_score=previous_score,
        delta=delta,
    )
