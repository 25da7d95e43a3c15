from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CatalogLocation:
    lat: float
    lon: float
    address: str


DEFAULT_LOCATIONS: Tuple[CatalogLocation, ...] = (
    CatalogLocation(lat=40.7128, lon=-74.0060, address="Lower Manhattan, New York, NY"),
    CatalogLocation(lat=34.0522, lon=-118.2437, address="Downtown Los Angeles, CA"),
    CatalogLocation(lat=41.8781, lon=-87.6298, address="The Loop, Chicago, IL"),
    CatalogLocation(lat=29.7604, lon=-95.3698, address="Downtown Houston, TX"),
    CatalogLocation(lat=47.6062, lon=-122.3321, address="Seattle, WA"),
)

DEFAULT_MATERIALS: Tuple[str, ...] = (
    "mixed recyclables",
    "cardboard boxes",
    "plastic film",
    "food-grade packaging",
    "metal scrap",
)

DEFAULT_UNIT = "kg"
DEFAULT_QUANTITY_RANGE: Tuple[int, int] = (80, 400)
DEFAULT_ITEM_COUNT_RANGE: Tuple[int, int] = (1, 2)

DEFAULT_COMPANY_SIZE = "SME"
DEFAULT_INDUSTRY = "other"
DEFAULT_RISK_APPETITE = "cost"
