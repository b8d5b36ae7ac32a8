import asyncio
import logging

from app.analysis.indicator_catalog import DEFAULT_CATALOG, IndicatorCatalog
from app.analysis.report_engine import ReportEngine
from app.schemas.worldbank import CountryReport
from app.services.worldbank_service import WorldBankService

logger = logging.getLogger(__name__)


class DataAggregator:
    def __init__(self, worldbank: WorldBankService | None = None, catalog: IndicatorCatalog = DEFAULT_CATALOG):
        self.worldbank = worldbank or WorldBankService()
        self.catalog = catalog
        self.engine = ReportEngine(catalog)

    async def get_country_report(self, country: str, from_year: str, to_year: str) -> CountryReport:
        # Trend, diff, bucket and momentum/friction codes overlap; each is fetched once
        raw = await self.worldbank.fetch_all(country, self.catalog.all_codes(), from_year, to_year)
        with_data = sum(1 for points in raw.values() if points)
        logger.info(f"Fetched {with_data}/{len(raw)} World Bank series for {country} {from_year}-{to_year}")
        return self.engine.build(country, from_year, to_year, raw)

    async def get_country_reports(
        self, countries: list[str], from_year: str, to_year: str
    ) -> list[CountryReport]:
        """One report per country, fetched concurrently, in the order given."""
        return list(await asyncio.gather(
            *(self.get_country_report(country, from_year, to_year) for country in countries)
        ))
