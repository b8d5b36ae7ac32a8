from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # World Bank v2 API (public, no key required)
    worldbank_api_url: str = "https://api.worldbank.org/v2"
    worldbank_timeout: float = 15
    worldbank_per_page: int = 20000
    worldbank_cache_ttl: int = 3600  # 1h, upstream data changes a few times a year

    # Request defaults
    default_country: str = "DEU"
    default_compare_countries: str = "DEU,USA"
    default_from_year: str = "2014"
    default_to_year: str = "2024"
    max_compare_countries: int = 5

    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
