"""
Report engine - turns the merged raw series of one country into a CountryReport.

indicators   = every catalog indicator, min-max normalized over the window
buckets      = weighted composites of the normalized scores (catalog order)
momentum     = growth-type indicators, friction = drag-type indicators
time_series  = sparse trend table, year_over_year_diffs = sparse YoY table
"""
import logging
from collections.abc import Mapping

from app.analysis.buckets import compute_bucket_score, empty_bucket
from app.analysis.derived_series import build_time_series, build_yoy_diffs
from app.analysis.indicator_catalog import DEFAULT_CATALOG, IndicatorCatalog
from app.analysis.normalizer import normalize_indicator
from app.schemas.worldbank import (
    CountryReport,
    DataPoint,
    MomentumFriction,
    NormalizedIndicator,
    SignalItem,
)

logger = logging.getLogger(__name__)

SPARKLINE_POINTS = 5


class ReportEngine:
    def __init__(self, catalog: IndicatorCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    def build(
        self,
        country: str,
        from_year: str,
        to_year: str,
        raw: Mapping[str, list[DataPoint]],
    ) -> CountryReport:
        normalized: dict[str, NormalizedIndicator] = {}
        for code in self.catalog.all_codes():
            normalized[code] = normalize_indicator(
                code,
                self.catalog.label(code),
                raw.get(code, []),
                inverse=self.catalog.is_inverse(code),
            )

        buckets = []
        for bucket in self.catalog.buckets:
            result = compute_bucket_score(bucket, normalized)
            buckets.append(result if result is not None else empty_bucket(bucket))

        latest_years = [n.latest_year for n in normalized.values() if n.latest_year]
        latest_year = max(latest_years, key=int) if latest_years else to_year

        logger.debug(
            f"Report {country} {from_year}-{to_year}: "
            f"{len(latest_years)}/{len(normalized)} indicators with data, latest {latest_year}"
        )

        return CountryReport(
            country=country,
            from_year=from_year,
            to_year=to_year,
            latest_year=latest_year,
            indicators=list(normalized.values()),
            buckets=buckets,
            momentum_friction=MomentumFriction(
                momentum=[self._signal_item(c, normalized, raw) for c in self.catalog.momentum],
                friction=[self._signal_item(c, normalized, raw) for c in self.catalog.friction],
            ),
            time_series=build_time_series(raw, self.catalog.trend_indicators),
            year_over_year_diffs=build_yoy_diffs(raw, self.catalog.diff_codes),
        )

    def _signal_item(
        self,
        code: str,
        normalized: Mapping[str, NormalizedIndicator],
        raw: Mapping[str, list[DataPoint]],
    ) -> SignalItem:
        norm = normalized[code]
        recent = sorted(raw.get(code, []), key=lambda p: int(p.year), reverse=True)
        return SignalItem(
            indicator=code,
            label=norm.label,
            score=norm.score,
            values=recent[:SPARKLINE_POINTS],
            latest_year=norm.latest_year,
        )
