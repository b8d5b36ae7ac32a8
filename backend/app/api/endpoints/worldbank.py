from fastapi import APIRouter, Depends, Query

from app.analysis.indicator_catalog import IndicatorCatalog
from app.api.dependencies import get_aggregator, get_catalog
from app.api.validation import validate_country, validate_country_list, validate_year_range
from app.config import get_settings
from app.schemas.worldbank import (
    CompareResponse,
    CountryOption,
    CountryReport,
    DiffIndicatorInfo,
    IndicatorCatalogResponse,
    IndicatorInfo,
)
from app.services.data_aggregator import DataAggregator

router = APIRouter(prefix="/api/worldbank", tags=["worldbank"])


@router.get("", response_model=CountryReport, response_model_exclude_none=True)
async def get_country_report(
    country: str | None = None,
    from_year: str | None = Query(None, alias="from"),
    to_year: str | None = Query(None, alias="to"),
    aggregator: DataAggregator = Depends(get_aggregator),
):
    settings = get_settings()
    country = validate_country(country or settings.default_country)
    from_year, to_year = validate_year_range(
        from_year or settings.default_from_year,
        to_year or settings.default_to_year,
    )
    return await aggregator.get_country_report(country, from_year, to_year)


@router.get("/compare", response_model=CompareResponse, response_model_exclude_none=True)
async def compare_countries(
    countries: str | None = None,
    from_year: str | None = Query(None, alias="from"),
    to_year: str | None = Query(None, alias="to"),
    aggregator: DataAggregator = Depends(get_aggregator),
    catalog: IndicatorCatalog = Depends(get_catalog),
):
    """Reports for up to five known countries, in the order requested."""
    settings = get_settings()
    codes = validate_country_list(
        countries or settings.default_compare_countries,
        catalog.countries,
        limit=settings.max_compare_countries,
    )
    from_year, to_year = validate_year_range(
        from_year or settings.default_from_year,
        to_year or settings.default_to_year,
    )
    reports = await aggregator.get_country_reports(codes, from_year, to_year)
    return CompareResponse(data=reports)


@router.get("/countries", response_model=list[CountryOption])
async def list_countries(catalog: IndicatorCatalog = Depends(get_catalog)):
    return [CountryOption(code=code, name=name) for code, name in catalog.countries.items()]


@router.get("/indicators", response_model=IndicatorCatalogResponse)
async def list_indicators(catalog: IndicatorCatalog = Depends(get_catalog)):
    def info(code: str) -> IndicatorInfo:
        return IndicatorInfo(code=code, label=catalog.label(code), inverse=catalog.is_inverse(code))

    return IndicatorCatalogResponse(
        indicators=[info(code) for code in catalog.all_codes()],
        trend=[info(code) for code in catalog.trend_indicators],
        diff=[
            DiffIndicatorInfo(code=d.code, label=d.label, improve_up=d.improve_up)
            for d in catalog.diff_indicators
        ],
    )
