from __future__ import annotations

from dataclasses import dataclass

import requests

from clients.errors import SourceMalformed, get_json
from domain.prices import FuelPrices
from services.price_fields import extract_prices

PROVIDER_NAME = "Bundesdurchschnitt"


@dataclass(frozen=True)
class NationalAverage:
    date_label: str
    prices: FuelPrices


class NationalAverageClient:
    """Reads a credential-free endpoint reporting nationwide average prices.

    Expected payload: ``{"date": "...", "super": "1.813", "e10": "1.756", "diesel": "1.714"}``.
    Prices are decimal strings; ``super`` is Super E5.
    """

    def __init__(
        self,
        *,
        url: str,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not url:
            msg = "url must be provided"
            raise ValueError(msg)

        self.url = url
        self.timeout = (connect_timeout, read_timeout)
        self._session = session or requests.Session()

    def get_average(self) -> NationalAverage:
        payload = get_json(self._session, self.url, params=None, timeout=self.timeout, provider=PROVIDER_NAME)

        date_raw = payload.get("date")
        if not isinstance(date_raw, str) or not date_raw.strip():
            raise SourceMalformed("National average payload missing date", payload=payload)
        if not any(key in payload for key in ("super", "e10", "diesel")):
            raise SourceMalformed("National average payload has no price fields", payload=payload)

        return NationalAverage(
            date_label=date_raw.strip(),
            prices=extract_prices(payload, e5_key="super"),
        )


__all__ = ["NationalAverage", "NationalAverageClient"]
