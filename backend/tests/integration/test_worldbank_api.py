"""
HTTP surface: /api/worldbank, /api/worldbank/compare and catalog endpoints
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from app.analysis.indicator_catalog import GDP_GROWTH, GINI, UNEMPLOYMENT
from app.api.dependencies import get_aggregator
from app.main import app
from app.services.data_aggregator import DataAggregator

pytestmark = pytest.mark.integration


@pytest.fixture
def upstream(wb_envelope, path_parts):
    """Fake World Bank: growth and unemployment series for every country"""
    series = {
        GDP_GROWTH: [(2022, 2.0), (2021, 3.0), (2020, 1.0)],
        UNEMPLOYMENT: [(2022, 6.0), (2021, 4.0), (2020, 5.0)],
    }

    def handler(request):
        country, indicator = path_parts(request)
        return httpx.Response(200, json=wb_envelope(indicator, country, series.get(indicator, [])))
    return handler


@pytest.fixture
def worldbank(mock_worldbank, upstream):
    return mock_worldbank(upstream)


@pytest.fixture
def upstream_calls(worldbank):
    return worldbank[1]


@pytest.fixture
def client(worldbank):
    service, _ = worldbank
    app.dependency_overrides[get_aggregator] = lambda: DataAggregator(service)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestCountryReportEndpoint:
    def test_report(self, client):
        resp = client.get("/api/worldbank", params={"country": "deu", "from": "2020", "to": "2022"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["country"] == "DEU"
        assert (body["from_year"], body["to_year"], body["latest_year"]) == ("2020", "2022", "2022")

        indicators = {i["indicator"]: i for i in body["indicators"]}
        assert indicators[GDP_GROWTH]["score"] == 50
        assert indicators[GDP_GROWTH]["delta"] == -50.0
        assert indicators[UNEMPLOYMENT]["score"] == 0

        # "no data" is signalled by absent keys, not nulls
        gini = indicators[GINI]
        assert gini["score"] == 0
        assert "latest_year" not in gini
        assert "delta" not in gini

        buckets = {b["id"]: b for b in body["buckets"]}
        assert buckets["employment"]["delta"] == -100.0
        assert buckets["inequality"] == {"id": "inequality", "name": "Inequality", "score": 0, "indicators": []}

        assert body["time_series"][0] == {"year": "2020", GDP_GROWTH: 1.0, UNEMPLOYMENT: 5.0}
        assert len(body["momentum_friction"]["friction"]) == 3

    def test_defaults(self, client):
        resp = client.get("/api/worldbank")

        assert resp.status_code == 200
        body = resp.json()
        assert (body["country"], body["from_year"], body["to_year"]) == ("DEU", "2014", "2024")

    def test_invalid_country(self, client, upstream_calls):
        resp = client.get("/api/worldbank", params={"country": "DE1"})

        assert resp.status_code == 400
        assert upstream_calls == []

    def test_invalid_range(self, client):
        resp = client.get("/api/worldbank", params={"from": "2024", "to": "2014"})

        assert resp.status_code == 400


class TestCompareEndpoint:
    def test_compare(self, client):
        resp = client.get("/api/worldbank/compare", params={"countries": "fra,FRA, usa ,xyz", "from": "2020", "to": "2022"})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [d["country"] for d in data] == ["FRA", "USA"]
        assert all(d["latest_year"] == "2022" for d in data)

    def test_compare_caps_country_count(self, client):
        resp = client.get("/api/worldbank/compare", params={"countries": "DEU,USA,GBR,FRA,JPN,CHN,IND"})

        assert [d["country"] for d in resp.json()["data"]] == ["DEU", "USA", "GBR", "FRA", "JPN"]

    def test_compare_without_valid_codes(self, client, upstream_calls):
        resp = client.get("/api/worldbank/compare", params={"countries": "xyz,abc"})

        assert resp.status_code == 400
        assert "No valid country codes" in resp.json()["detail"]
        assert upstream_calls == []

    def test_compare_default_countries(self, client):
        resp = client.get("/api/worldbank/compare")

        assert [d["country"] for d in resp.json()["data"]] == ["DEU", "USA"]


class TestCatalogEndpoints:
    def test_countries(self, client):
        resp = client.get("/api/worldbank/countries")

        assert resp.status_code == 200
        countries = resp.json()
        assert countries[0] == {"code": "DEU", "name": "Germany"}
        assert len(countries) == 16

    def test_indicators(self, client):
        body = client.get("/api/worldbank/indicators").json()

        by_code = {i["code"]: i for i in body["indicators"]}
        assert by_code[UNEMPLOYMENT]["inverse"] is True
        assert by_code[GDP_GROWTH]["inverse"] is False
        assert [d["improve_up"] for d in body["diff"]] == [True, True, False, False, False, True]
        assert body["trend"][0]["code"] == GDP_GROWTH

    def test_health(self, client):
        assert client.get("/api/health").json()["status"] == "ok"
