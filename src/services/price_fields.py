from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from domain.prices import UNAVAILABLE, FuelPrices


def to_price(value: Any) -> Decimal:
    """Parse a price from either a JSON number or a decimal string.

    Anything that is not a finite, positive number becomes ``UNAVAILABLE``.
    Tankerkönig reports closed pumps as ``false``, which lands here too.
    """
    if value is None or isinstance(value, bool):
        return UNAVAILABLE
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    elif not isinstance(value, (int, float, Decimal)):
        return UNAVAILABLE

    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return UNAVAILABLE

    if not parsed.is_finite() or parsed <= 0:
        return UNAVAILABLE
    return parsed


def extract_prices(
    record: Mapping[str, Any],
    *,
    e5_key: str = "e5",
    e10_key: str = "e10",
    diesel_key: str = "diesel",
) -> FuelPrices:
    return FuelPrices(
        e5=to_price(record.get(e5_key)),
        e10=to_price(record.get(e10_key)),
        diesel=to_price(record.get(diesel_key)),
    )


__all__ = ["extract_prices", "to_price"]
