"""API request validation utilities."""
import re
from collections.abc import Container

from fastapi import HTTPException

_COUNTRY_RE = re.compile(r"^[A-Z]{3}$")
_YEAR_RE = re.compile(r"^\d{4}$")


def validate_country(country: str) -> str:
    """Validate and normalize an ISO 3166-1 alpha-3 country code.

    Args:
        country: Raw country string from request

    Returns:
        Validated and normalized code (uppercase, stripped)

    Raises:
        HTTPException: If the code is not three letters
    """
    if not country or not country.strip():
        raise HTTPException(status_code=400, detail="Country cannot be empty")

    country = country.strip().upper()

    # World Bank uses ISO3 codes: DEU, USA, GBR
    if not _COUNTRY_RE.match(country):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid country code: '{country}'. Use a 3-letter ISO code such as DEU."
        )

    return country


def parse_country_list(raw: str, known: Container[str], limit: int = 5) -> list[str]:
    """Split a comma-separated country list into unique known codes.

    Tokens are trimmed and uppercased; anything that is not a known 3-letter
    code is dropped. Keeps first-seen order and at most `limit` codes.
    """
    codes = []
    for token in raw.split(","):
        code = token.strip().upper()
        if len(code) == 3 and code in known and code not in codes:
            codes.append(code)
    return codes[:limit]


def validate_country_list(raw: str, known: Container[str], limit: int = 5) -> list[str]:
    codes = parse_country_list(raw or "", known, limit)
    if not codes:
        raise HTTPException(
            status_code=400,
            detail="No valid country codes. Use countries=DEU,USA,FRA"
        )
    return codes


def validate_year_range(from_year: str, to_year: str) -> tuple[str, str]:
    """Validate a from/to pair of 4-digit years with from <= to."""
    from_year = (from_year or "").strip()
    to_year = (to_year or "").strip()
    for name, year in (("from", from_year), ("to", to_year)):
        if not _YEAR_RE.match(year):
            raise HTTPException(
                status_code=400,
                detail=f"Invalid '{name}' year: '{year}'. Use a 4-digit year such as 2014."
            )
    if int(from_year) > int(to_year):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid range: from ({from_year}) is after to ({to_year})"
        )
    return from_year, to_year
