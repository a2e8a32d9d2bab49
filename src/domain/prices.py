from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum

UNAVAILABLE = Decimal("0")
PLACEHOLDER_FRESHNESS = "–"
PLACEHOLDER_SOURCE = "placeholder"
MAX_SEARCH_RADIUS_KM = 25.0


class Fuel(StrEnum):
    E5 = "e5"
    E10 = "e10"
    DIESEL = "diesel"


@dataclass(frozen=True)
class FuelPrices:
    """Prices per litre in EUR. A value of ``UNAVAILABLE`` marks a missing price."""

    e5: Decimal = UNAVAILABLE
    e10: Decimal = UNAVAILABLE
    diesel: Decimal = UNAVAILABLE

    def price(self, fuel: Fuel) -> Decimal:
        return getattr(self, Fuel(fuel).value)

    def is_available(self, fuel: Fuel) -> bool:
        return self.price(fuel) > UNAVAILABLE

    def availability(self) -> dict[Fuel, bool]:
        return {fuel: self.is_available(fuel) for fuel in Fuel}


@dataclass(frozen=True)
class PriceQuote:
    """Normalized result of one resolution attempt, rendered once and discarded."""

    station_label: str
    fuel_prices: FuelPrices = field(default_factory=FuelPrices)
    freshness_label: str = PLACEHOLDER_FRESHNESS
    source: str = PLACEHOLDER_SOURCE

    @classmethod
    def placeholder(cls, station_label: str) -> PriceQuote:
        return cls(station_label=station_label)

    @property
    def is_placeholder(self) -> bool:
        return self.source == PLACEHOLDER_SOURCE


@dataclass(frozen=True)
class SearchPoint:
    latitude: float
    longitude: float
    radius_km: float = 5.0

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:
            raise ValueError("latitude must be within [-90, 90]")
        if not -180 <= self.longitude <= 180:
            raise ValueError("longitude must be within [-180, 180]")
        if not 0 < self.radius_km <= MAX_SEARCH_RADIUS_KM:
            msg = f"radius_km must be > 0 and <= {MAX_SEARCH_RADIUS_KM:g}"
            raise ValueError(msg)


__all__ = [
    "MAX_SEARCH_RADIUS_KM",
    "PLACEHOLDER_FRESHNESS",
    "PLACEHOLDER_SOURCE",
    "UNAVAILABLE",
    "Fuel",
    "FuelPrices",
    "PriceQuote",
    "SearchPoint",
]
