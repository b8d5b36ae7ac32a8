"""Chart-ready tables built from the raw fetched series.

Both tables are lists of year rows sorted ascending. A row only carries a
column for an indicator that has a value that year; missing cells are left
out rather than zero-filled, since 0 is a legitimate YoY change.
"""
from collections.abc import Iterable, Mapping

from app.analysis.normalizer import round_half_up
from app.schemas.worldbank import DataPoint


def _rows_by_year(rows: dict[str, dict[str, str | float]]) -> list[dict[str, str | float]]:
    return [rows[year] for year in sorted(rows, key=int)]


def build_time_series(
    raw: Mapping[str, list[DataPoint]],
    codes: Iterable[str],
) -> list[dict[str, str | float]]:
    """One row per year present in any of the given indicators."""
    rows: dict[str, dict[str, str | float]] = {}
    for code in codes:
        for point in raw.get(code, []):
            rows.setdefault(point.year, {"year": point.year})[code] = point.value
    return _rows_by_year(rows)


def yoy_diffs(points: list[DataPoint]) -> list[DataPoint]:
    """Change between consecutive available points, ascending by year.

    Gaps in the data are spanned: 2019 -> 2021 yields a single diff at 2021.
    """
    ordered = sorted(points, key=lambda p: int(p.year))
    return [
        DataPoint(year=cur.year, value=round_half_up(cur.value - prev.value, 2))
        for prev, cur in zip(ordered, ordered[1:])
    ]


def build_yoy_diffs(
    raw: Mapping[str, list[DataPoint]],
    codes: Iterable[str],
) -> list[dict[str, str | float]]:
    """One row per year that has at least one diff across the given indicators."""
    rows: dict[str, dict[str, str | float]] = {}
    for code in codes:
        for diff in yoy_diffs(raw.get(code, [])):
            rows.setdefault(diff.year, {"year": diff.year})[code] = diff.value
    return _rows_by_year(rows)
