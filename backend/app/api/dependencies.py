from fastapi import Depends

from app.analysis.indicator_catalog import DEFAULT_CATALOG, IndicatorCatalog
from app.services.data_aggregator import DataAggregator
from app.services.worldbank_service import WorldBankService


def get_catalog() -> IndicatorCatalog:
    """Dependency returning the static indicator catalog."""
    return DEFAULT_CATALOG


def get_aggregator(catalog: IndicatorCatalog = Depends(get_catalog)) -> DataAggregator:
    """Dependency building a request-scoped aggregator over the World Bank client."""
    return DataAggregator(WorldBankService(), catalog)
