"""
World Bank indicator catalog.

Indicator codes, display labels, score direction, bucket definitions and the
chart / momentum / friction groupings used to build a country report. The
tables are fixed data; `DEFAULT_CATALOG` bundles them into an immutable
`IndicatorCatalog` that is passed into the report engine and aggregator, so an
alternate catalog can be swapped in without touching module state.
"""
from pydantic import BaseModel, model_validator

# Indicator codes used across the report
GDP_PCAP = "NY.GDP.PCAP.CD"  # GDP per capita (current US$)
GDP_GROWTH = "NY.GDP.PCAP.KD.ZG"  # GDP per capita growth (annual %)
INTERNET = "IT.NET.USER.ZS"  # Individuals using the Internet (% of population)
UNEMPLOYMENT = "SL.UEM.TOTL.ZS"  # Unemployment, total (% of labor force)
INFLATION = "FP.CPI.TOTL.ZG"  # Inflation, consumer prices (annual %)
CO2_PC = "EN.ATM.CO2E.PC"  # CO2 emissions (metric tons per capita)
GINI = "SI.POV.GINI"  # Gini index
TRADE_OPEN = "NE.TRD.GNFS.ZS"  # Trade (% of GDP)
FERTILITY = "SP.DYN.TFRT.IN"  # Fertility rate (births per woman)
POP_GROWTH = "SP.POP.GROW"  # Population growth (annual %)
SCHOOL_ENROLL = "SE.SEC.ENRR"  # School enrollment, secondary (% gross)
HEALTH_EXP = "SH.XPD.CHEX.GD.ZS"  # Current health expenditure (% of GDP)
LIFE_EXPECTANCY = "SP.DYN.LE00.IN"  # Life expectancy at birth (years)
ELECTRICITY = "EG.ELC.ACCS.ZS"  # Access to electricity (% of population)

INDICATOR_LABELS: dict[str, str] = {
    GDP_PCAP:        "GDP per capita",
    GDP_GROWTH:      "GDP per capita growth",
    INTERNET:        "Internet users (% population)",
    UNEMPLOYMENT:    "Unemployment rate",
    INFLATION:       "Inflation (consumer prices)",
    CO2_PC:          "CO2 emissions per capita",
    GINI:            "Gini coefficient",
    TRADE_OPEN:      "Trade (% of GDP)",
    FERTILITY:       "Fertility rate",
    POP_GROWTH:      "Population growth",
    SCHOOL_ENROLL:   "Secondary enrollment",
    HEALTH_EXP:      "Health expenditure (% GDP)",
    LIFE_EXPECTANCY: "Life expectancy (years)",
    ELECTRICITY:     "Access to electricity (%)",
}

# Lower raw value is better
INVERSE_INDICATORS: frozenset[str] = frozenset({UNEMPLOYMENT, GINI, CO2_PC})

TREND_CHART_INDICATORS: tuple[str, ...] = (
    GDP_GROWTH,
    INTERNET,
    UNEMPLOYMENT,
    INFLATION,
    GINI,
    LIFE_EXPECTANCY,
    ELECTRICITY,
)

MOMENTUM_INDICATORS: tuple[str, ...] = (GDP_GROWTH, INTERNET)
FRICTION_INDICATORS: tuple[str, ...] = (UNEMPLOYMENT, INFLATION, CO2_PC)

COUNTRIES: dict[str, str] = {
    "DEU": "Germany",
    "USA": "United States",
    "GBR": "United Kingdom",
    "FRA": "France",
    "JPN": "Japan",
    "CHN": "China",
    "IND": "India",
    "BRA": "Brazil",
    "CAN": "Canada",
    "ITA": "Italy",
    "ESP": "Spain",
    "NLD": "Netherlands",
    "SWE": "Sweden",
    "POL": "Poland",
    "KOR": "Korea, Rep.",
    "AUS": "Australia",
}


class BucketConfig(BaseModel):
    """A weighted composite of related indicators (one "dimension" card)."""

    id: str
    name: str
    indicators: tuple[str, ...]
    weights: tuple[float, ...] | None = None  # positional; None = equal weights

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_weights(self):
        if self.weights is not None and len(self.weights) != len(self.indicators):
            raise ValueError(
                f"Bucket '{self.id}' has {len(self.weights)} weights for {len(self.indicators)} indicators"
            )
        return self

    def resolved_weights(self) -> tuple[float, ...]:
        if self.weights is None:
            return tuple(1.0 for _ in self.indicators)
        return self.weights


class DiffChartIndicator(BaseModel):
    code: str
    label: str
    improve_up: bool = True  # whether a positive YoY change is an improvement

    model_config = {"frozen": True}


BUCKETS: tuple[BucketConfig, ...] = (
    BucketConfig(id="prosperity", name="Prosperity", indicators=(GDP_PCAP, GDP_GROWTH), weights=(0.7, 0.3)),
    BucketConfig(id="employment", name="Employment", indicators=(UNEMPLOYMENT,), weights=(1,)),
    BucketConfig(id="connectivity", name="Connectivity", indicators=(INTERNET,), weights=(1,)),
    BucketConfig(id="inequality", name="Inequality", indicators=(GINI,), weights=(1,)),
)

DIFF_CHART_INDICATORS: tuple[DiffChartIndicator, ...] = (
    DiffChartIndicator(code=GDP_GROWTH, label="GDP growth", improve_up=True),
    DiffChartIndicator(code=INTERNET, label="Internet", improve_up=True),
    DiffChartIndicator(code=UNEMPLOYMENT, label="Unemployment", improve_up=False),
    DiffChartIndicator(code=INFLATION, label="Inflation", improve_up=False),
    DiffChartIndicator(code=GINI, label="Gini", improve_up=False),
    DiffChartIndicator(code=TRADE_OPEN, label="Trade openness", improve_up=True),
)


class IndicatorCatalog(BaseModel):
    labels: dict[str, str]
    inverse: frozenset[str] = frozenset()
    buckets: tuple[BucketConfig, ...] = ()
    trend_indicators: tuple[str, ...] = ()
    diff_indicators: tuple[DiffChartIndicator, ...] = ()
    momentum: tuple[str, ...] = ()
    friction: tuple[str, ...] = ()
    countries: dict[str, str] = {}

    model_config = {"frozen": True}

    def label(self, code: str) -> str:
        return self.labels.get(code, code)

    def is_inverse(self, code: str) -> bool:
        return code in self.inverse

    @property
    def diff_codes(self) -> tuple[str, ...]:
        return tuple(d.code for d in self.diff_indicators)

    def all_codes(self) -> list[str]:
        """Every indicator the report needs, each listed once, first-seen order.

        Covers the labelled indicators plus anything referenced only by a
        bucket or chart grouping.
        """
        codes = list(self.labels)
        for bucket in self.buckets:
            codes.extend(bucket.indicators)
        codes.extend(self.trend_indicators)
        codes.extend(self.diff_codes)
        codes.extend(self.momentum)
        codes.extend(self.friction)
        return list(dict.fromkeys(codes))

    def is_known_country(self, code: str) -> bool:
        return code in self.countries


DEFAULT_CATALOG = IndicatorCatalog(
    labels=INDICATOR_LABELS,
    inverse=INVERSE_INDICATORS,
    buckets=BUCKETS,
    trend_indicators=TREND_CHART_INDICATORS,
    diff_indicators=DIFF_CHART_INDICATORS,
    momentum=MOMENTUM_INDICATORS,
    friction=FRICTION_INDICATORS,
    countries=COUNTRIES,
)
