"""
Bucket (dimension) aggregation.

score = round(sum(score_i * w_i) / sum(w_i)) over indicators that have data;
missing indicators drop out of both sums instead of counting as zero.
delta = plain mean of the available indicator deltas (weights not applied).
"""
from collections.abc import Mapping

from app.analysis.indicator_catalog import BucketConfig
from app.analysis.normalizer import clamp, round_half_up
from app.schemas.worldbank import BucketIndicator, BucketResult, NormalizedIndicator


def compute_bucket_score(
    bucket: BucketConfig,
    normalized: Mapping[str, NormalizedIndicator],
) -> BucketResult | None:
    """Aggregate one bucket. Returns None when none of its indicators has data."""
    weights = bucket.resolved_weights()
    total_weight = 0.0
    weighted_sum = 0.0
    indicators: list[BucketIndicator] = []
    deltas: list[float] = []

    for code, weight in zip(bucket.indicators, weights):
        norm = normalized.get(code)
        if norm is None or not norm.values:
            continue

        total_weight += weight
        weighted_sum += norm.score * weight
        indicators.append(BucketIndicator(
            code=code,
            label=norm.label,
            latest_value=norm.latest_value,
            latest_year=norm.latest_year,
        ))
        if norm.delta is not None:
            deltas.append(norm.delta)

    if total_weight == 0:
        return None

    score = round_half_up(weighted_sum / total_weight)
    delta = round_half_up(sum(deltas) / len(deltas), 1) if deltas else None

    return BucketResult(
        id=bucket.id,
        name=bucket.name,
        score=int(clamp(score)),
        delta=delta,
        indicators=indicators,
    )


def empty_bucket(bucket: BucketConfig) -> BucketResult:
    """Placeholder for a bucket with no data: zero score, no indicators."""
    return BucketResult(id=bucket.id, name=bucket.name, score=0, indicators=[])
