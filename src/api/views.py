from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from domain.prices import Fuel, PriceQuote

MISSING_PRICE = "– €"

# Display order and labels on the dashboard card.
FUEL_LABELS: tuple[tuple[Fuel, str], ...] = (
    (Fuel.E10, "Super E10"),
    (Fuel.E5, "Super E5"),
    (Fuel.DIESEL, "Diesel"),
)


@dataclass(frozen=True)
class FuelRow:
    fuel: Fuel
    label: str
    price: Decimal
    available: bool

    @property
    def css_class(self) -> str:
        return self.fuel.value


def format_price(value: Decimal, available: bool = True) -> str:
    if not available or value <= 0:
        return MISSING_PRICE
    return f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)} €"


def fuel_rows(quote: PriceQuote) -> list[FuelRow]:
    availability = quote.fuel_prices.availability()
    return [
        FuelRow(fuel=fuel, label=label, price=quote.fuel_prices.price(fuel), available=availability[fuel])
        for fuel, label in FUEL_LABELS
    ]


__all__ = ["FUEL_LABELS", "MISSING_PRICE", "FuelRow", "format_price", "fuel_rows"]
