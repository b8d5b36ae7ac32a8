"""
World Bank v2 API client.

GET {base}/country/{ISO3}/indicator/{code}?format=json&per_page=N&date=FROM:TO
returns a two-element envelope [metadata, records]. Anything else (including
the single-element error envelope) is treated as no data. Failures never
raise: a series that cannot be fetched is an empty list.
"""
import asyncio
import logging
import math
import re
import time

import httpx

from app.config import get_settings
from app.schemas.worldbank import DataPoint

logger = logging.getLogger(__name__)

# Upstream response cache (url -> (points, timestamp)), shared across requests
_response_cache: dict[str, tuple[list[DataPoint], float]] = {}
_CACHE_MAX_ENTRIES = 500

_YEAR_RE = re.compile(r"^\d{4}$")


def _to_float(value) -> float | None:
    """Parse a record value; None for null, empty, non-numeric, NaN or inf."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_records(payload) -> list[DataPoint] | None:
    """Extract points from an API payload, most recent year first.

    Returns None if the payload is not a [metadata, records] envelope.
    """
    if not isinstance(payload, list) or len(payload) != 2:
        return None
    records = payload[1]
    if records is None:
        # Valid envelope, upstream has no observations in range
        return []
    if not isinstance(records, list):
        return None

    points = []
    for record in records:
        if not isinstance(record, dict):
            continue
        year = str(record.get("date", "")).strip()
        if not _YEAR_RE.match(year):
            continue
        value = _to_float(record.get("value"))
        if value is None:
            continue
        points.append(DataPoint(year=year, value=value))

    points.sort(key=lambda p: int(p.year), reverse=True)
    return points


class WorldBankService:
    def __init__(self, client: httpx.AsyncClient | None = None):
        settings = get_settings()
        self.base_url = settings.worldbank_api_url.rstrip("/")
        self.timeout = settings.worldbank_timeout
        self.per_page = settings.worldbank_per_page
        self.cache_ttl = settings.worldbank_cache_ttl
        self._client = client

    def build_url(self, country: str, indicator: str, from_year: str, to_year: str) -> str:
        return (
            f"{self.base_url}/country/{country}/indicator/{indicator}"
            f"?format=json&per_page={self.per_page}&date={from_year}:{to_year}"
        )

    async def _get(self, url: str):
        try:
            if self._client is not None:
                resp = await self._client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(url)
            if resp.status_code == 200:
                return resp.json()
            logger.warning(f"World Bank {url} returned {resp.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"World Bank error for {url}: {e}")
            return None
        except ValueError as e:
            logger.error(f"World Bank returned invalid JSON for {url}: {e}")
            return None

    async def fetch_series(
        self, country: str, indicator: str, from_year: str, to_year: str
    ) -> list[DataPoint]:
        """One indicator for one country, most recent year first."""
        url = self.build_url(country, indicator, from_year, to_year)

        now = time.time()
        cached = _response_cache.get(url)
        if cached and now - cached[1] < self.cache_ttl:
            logger.debug(f"World Bank cache hit for {country} {indicator}")
            return list(cached[0])

        payload = await self._get(url)
        if payload is None:
            return []

        points = parse_records(payload)
        if points is None:
            logger.warning(f"Unexpected World Bank response shape for {country} {indicator}")
            return []

        # Re-insert so dict order follows write time for equal timestamps
        _response_cache.pop(url, None)
        _response_cache[url] = (points, now)
        if len(_response_cache) > _CACHE_MAX_ENTRIES:
            cutoff = now - self.cache_ttl
            stale = [k for k, v in _response_cache.items() if v[1] < cutoff]
            for k in stale:
                del _response_cache[k]

            overflow = len(_response_cache) - _CACHE_MAX_ENTRIES
            if overflow > 0:
                oldest = sorted(_response_cache.items(), key=lambda kv: kv[1][1])[:overflow]
                for k, _ in oldest:
                    del _response_cache[k]
                logger.debug(f"World Bank cache full, evicted {overflow} oldest entries")

        return list(points)

    async def fetch_all(
        self, country: str, indicators: list[str], from_year: str, to_year: str
    ) -> dict[str, list[DataPoint]]:
        """Fetch every indicator concurrently; keys follow first-seen request order."""
        codes = list(dict.fromkeys(indicators))
        results = await asyncio.gather(
            *(self.fetch_series(country, code, from_year, to_year) for code in codes),
            return_exceptions=True,
        )

        merged: dict[str, list[DataPoint]] = {}
        for code, result in zip(codes, results):
            if isinstance(result, BaseException):
                logger.error(f"World Bank fetch failed for {country} {code}: {result}")
                merged[code] = []
            else:
                merged[code] = result
        return merged
