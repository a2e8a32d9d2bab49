from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import requests

from clients.errors import SourceMalformed, SourceRejected, get_json
from domain.prices import FuelPrices, SearchPoint
from services.price_fields import extract_prices

# API docs: https://creativecommons.tankerkoenig.de/
# API keys: https://onboarding.tankerkoenig.de/
TANKERKOENIG_BASE_URL = "https://creativecommons.tankerkoenig.de/json"
PROVIDER_NAME = "Tankerkönig"


@dataclass(frozen=True)
class StationDetail:
    name: str
    brand: str


@dataclass(frozen=True)
class StationRecord:
    id: str
    name: str
    brand: str
    prices: FuelPrices
    dist_km: float | None = None

    @property
    def label(self) -> str:
        return station_label(self.name, self.brand)

    def matches(self, name_filter: str) -> bool:
        needle = name_filter.casefold()
        return needle in self.name.casefold() or needle in self.brand.casefold()


def station_label(name: str, brand: str) -> str:
    """Prefix the brand unless the station name already carries it."""
    if not brand or brand.casefold() in name.casefold():
        return name
    return f"{brand} {name}"


class TankerkoenigClient:
    """Client for the three Tankerkönig endpoints the dashboard needs."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = TANKERKOENIG_BASE_URL,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            msg = "api_key must be provided"
            raise ValueError(msg)

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = (connect_timeout, read_timeout)
        self._session = session or requests.Session()

    def get_station_detail(self, station_id: str) -> StationDetail:
        payload = self._request("/detail.php", params={"id": station_id}, require_ok=False)
        station = payload.get("station")
        if not isinstance(station, dict):
            raise SourceMalformed("Tankerkönig detail payload missing station", payload=payload)

        name = station.get("name")
        if not isinstance(name, str) or not name.strip():
            raise SourceMalformed("Tankerkönig station detail has no name", payload=payload)
        brand = station.get("brand")
        return StationDetail(name=name.strip(), brand=brand.strip() if isinstance(brand, str) else "")

    def get_prices(self, station_ids: Iterable[str]) -> dict[str, FuelPrices]:
        ids = [station_id for station_id in station_ids if station_id]
        if not ids:
            msg = "at least one station id must be provided"
            raise ValueError(msg)

        payload = self._request("/prices.php", params={"ids": ",".join(ids)})
        prices_raw = payload.get("prices")
        if not isinstance(prices_raw, dict):
            raise SourceMalformed("Tankerkönig prices payload missing prices", payload=payload)

        return {
            str(station_id): extract_prices(entry)
            for station_id, entry in prices_raw.items()
            if isinstance(entry, dict)
        }

    def list_stations(
        self,
        point: SearchPoint,
        *,
        sort: str = "dist",
        fuel_type: str = "all",
    ) -> list[StationRecord]:
        params = {
            "lat": point.latitude,
            "lng": point.longitude,
            "rad": point.radius_km,
            "sort": sort,
            "type": fuel_type,
        }
        payload = self._request("/list.php", params=params)
        stations_raw = payload.get("stations")
        if not isinstance(stations_raw, list):
            raise SourceMalformed("Tankerkönig list payload missing stations", payload=payload)

        return [self._parse_station(entry) for entry in stations_raw if isinstance(entry, dict)]

    def _request(self, path: str, *, params: dict[str, Any], require_ok: bool = True) -> dict[str, Any]:
        payload = get_json(
            self._session,
            f"{self.base_url}{path}",
            params={**params, "apikey": self.api_key},
            timeout=self.timeout,
            provider=PROVIDER_NAME,
        )
        ok = payload.get("ok")
        if ok is False or (require_ok and ok is not True):
            message = payload.get("message") or "Tankerkönig answered with ok=false"
            raise SourceRejected(str(message), payload=payload)
        return payload

    @staticmethod
    def _parse_station(entry: dict[str, Any]) -> StationRecord:
        dist_raw = entry.get("dist")
        return StationRecord(
            id=str(entry.get("id") or ""),
            name=str(entry.get("name") or "").strip(),
            brand=str(entry.get("brand") or "").strip(),
            prices=extract_prices(entry),
            dist_km=float(dist_raw) if isinstance(dist_raw, (int, float)) and not isinstance(dist_raw, bool) else None,
        )


__all__ = ["StationDetail", "StationRecord", "TANKERKOENIG_BASE_URL", "TankerkoenigClient", "station_label"]
