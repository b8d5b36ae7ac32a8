from pydantic import BaseModel


class DataPoint(BaseModel):
    year: str  # 4-digit year, e.g. "2022"
    value: float


class NormalizedIndicator(BaseModel):
    indicator: str
    label: str
    values: list[DataPoint] = []
    latest_year: str | None = None
    latest_value: float | None = None
    score: int = 0  # 0-100, 0 with no latest_year means "no data"
    previous_score: float | None = None
    delta: float | None = None


class BucketIndicator(BaseModel):
    code: str
    label: str
    latest_value: float | None = None
    latest_year: str | None = None


class BucketResult(BaseModel):
    id: str
    name: str
    score: int = 0
    delta: float | None = None
    indicators: list[BucketIndicator] = []  # empty = no data, not "scored zero"


class SignalItem(BaseModel):
    indicator: str
    label: str
    score: int = 0
    values: list[DataPoint] = []  # most recent first, for sparklines
    latest_year: str | None = None


class MomentumFriction(BaseModel):
    momentum: list[SignalItem] = []
    friction: list[SignalItem] = []


class CountryReport(BaseModel):
    country: str
    from_year: str
    to_year: str
    latest_year: str
    indicators: list[NormalizedIndicator] = []
    buckets: list[BucketResult] = []
    momentum_friction: MomentumFriction = MomentumFriction()
    # Sparse year rows: {"year": "2020", "<indicator code>": value, ...}
    time_series: list[dict[str, str | float]] = []
    year_over_year_diffs: list[dict[str, str | float]] = []


class CompareResponse(BaseModel):
    data: list[CountryReport] = []


class CountryOption(BaseModel):
    code: str
    name: str


class IndicatorInfo(BaseModel):
    code: str
    label: str
    inverse: bool = False


class DiffIndicatorInfo(BaseModel):
    code: str
    label: str
    improve_up: bool = True


class IndicatorCatalogResponse(BaseModel):
    indicators: list[IndicatorInfo] = []
    trend: list[IndicatorInfo] = []
    diff: list[DiffIndicatorInfo] = []
