import asyncio

import httpx
import pytest

from app.schemas.worldbank import DataPoint
from app.services import worldbank_service
from app.services.worldbank_service import WorldBankService


@pytest.fixture(autouse=True)
def clear_response_cache():
    """Upstream cache is process-wide; isolate every test from it"""
    worldbank_service._response_cache.clear()
    yield
    worldbank_service._response_cache.clear()


@pytest.fixture
def make_points():
    """Build DataPoints from (year, value) pairs"""
    def _make(*pairs) -> list[DataPoint]:
        return [DataPoint(year=str(year), value=value) for year, value in pairs]
    return _make


@pytest.fixture
def wb_envelope():
    """World Bank style [metadata, records] payload from (year, value) pairs"""
    def _envelope(indicator: str, country: str, pairs) -> list:
        records = [
            {
                "indicator": {"id": indicator, "value": indicator},
                "country": {"id": country[:2], "value": country},
                "countryiso3code": country,
                "date": str(year),
                "value": value,
                "unit": "",
                "obs_status": "",
                "decimal": 1,
            }
            for year, value in pairs
        ]
        meta = {"page": 1, "pages": 1, "per_page": 20000, "total": len(records)}
        return [meta, records]
    return _envelope


@pytest.fixture
def mock_worldbank():
    """WorldBankService backed by an httpx.MockTransport.

    The handler receives the httpx.Request; `calls` records every requested
    URL path so tests can assert on fetch counts. Clients are closed on
    teardown.
    """
    clients: list[httpx.AsyncClient] = []

    def _service(handler):
        calls: list[str] = []

        def _recording_handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_recording_handler))
        clients.append(client)
        return WorldBankService(client=client), calls

    yield _service

    for client in clients:
        asyncio.run(client.aclose())


def split_path(request: httpx.Request) -> tuple[str, str]:
    """(country, indicator) from /v2/country/{country}/indicator/{indicator}"""
    parts = request.url.path.strip("/").split("/")
    return parts[-3], parts[-1]


@pytest.fixture
def path_parts():
    return split_path
