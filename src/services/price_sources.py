from __future__ import annotations

import logging
from typing import Protocol

from clients.errors import PriceSourceError, SourceMalformed, SourceRejected
from clients.national_average import NationalAverageClient
from clients.tankerkoenig import StationRecord, TankerkoenigClient, station_label
from domain.prices import PriceQuote, SearchPoint

logger = logging.getLogger(__name__)

GENERIC_STATION_LABEL = "Meine Tankstelle"
NATIONAL_AVERAGE_LABEL = "Bundesdurchschnitt"


class QuoteSource(Protocol):
    source_name: str

    def is_configured(self) -> bool: ...

    def fetch_quote(self) -> PriceQuote: ...


class StationByIdSource(QuoteSource):
    """Looks up one station by its Tankerkönig id: detail for the name, prices for the numbers."""

    def __init__(
        self,
        *,
        client: TankerkoenigClient | None,
        station_id: str | None,
        source_name: str = "tankerkoenig-station",
    ) -> None:
        self.client = client
        self.station_id = station_id or None
        self.source_name = source_name

    def is_configured(self) -> bool:
        return self.client is not None and self.station_id is not None

    def fetch_quote(self) -> PriceQuote:
        if self.client is None or self.station_id is None:
            raise RuntimeError(f"{self.source_name} is not configured")

        client, station_id = self.client, self.station_id
        label = self._station_label(client, station_id)

        prices = client.get_prices([station_id])
        try:
            station_prices = prices[station_id]
        except KeyError as exc:
            msg = f"Station {station_id} missing from Tankerkönig prices response"
            raise SourceMalformed(msg, payload=prices) from exc

        return PriceQuote(
            station_label=label,
            fuel_prices=station_prices,
            freshness_label="Live (Tankerkönig)",
            source=self.source_name,
        )

    def _station_label(self, client: TankerkoenigClient, station_id: str) -> str:
        try:
            detail = client.get_station_detail(station_id)
        except PriceSourceError as exc:
            logger.warning("Station detail for %s unavailable, using generic label: %s", station_id, exc)
            return GENERIC_STATION_LABEL
        return station_label(detail.name, detail.brand)


class RadiusSearchSource(QuoteSource):
    """Searches stations around a point and picks the first match, nearest first."""

    def __init__(
        self,
        *,
        client: TankerkoenigClient | None,
        point: SearchPoint | None,
        name_filter: str | None = None,
        source_name: str = "tankerkoenig-search",
    ) -> None:
        self.client = client
        self.point = point
        self.name_filter = (name_filter or "").strip() or None
        self.source_name = source_name

    def is_configured(self) -> bool:
        return self.client is not None and self.point is not None

    def fetch_quote(self) -> PriceQuote:
        if self.client is None or self.point is None:
            raise RuntimeError(f"{self.source_name} is not configured")

        stations = self.client.list_stations(self.point, sort="dist")
        station = select_station(stations, self.name_filter)
        if station is None:
            if self.name_filter:
                msg = f"No station matching {self.name_filter!r} within {self.point.radius_km:g} km"
            else:
                msg = f"No station within {self.point.radius_km:g} km"
            raise SourceRejected(msg)

        return PriceQuote(
            station_label=station.label or GENERIC_STATION_LABEL,
            fuel_prices=station.prices,
            freshness_label="Live",
            source=self.source_name,
        )


class NationalAverageSource(QuoteSource):
    def __init__(
        self,
        *,
        client: NationalAverageClient | None,
        source_name: str = "national-average",
    ) -> None:
        self.client = client
        self.source_name = source_name

    def is_configured(self) -> bool:
        return self.client is not None

    def fetch_quote(self) -> PriceQuote:
        if self.client is None:
            raise RuntimeError(f"{self.source_name} is not configured")

        average = self.client.get_average()
        return PriceQuote(
            station_label=NATIONAL_AVERAGE_LABEL,
            fuel_prices=average.prices,
            freshness_label=average.date_label,
            source=self.source_name,
        )


def select_station(stations: list[StationRecord], name_filter: str | None) -> StationRecord | None:
    if not name_filter:
        return stations[0] if stations else None
    return next((station for station in stations if station.matches(name_filter)), None)


__all__ = [
    "GENERIC_STATION_LABEL",
    "NATIONAL_AVERAGE_LABEL",
    "NationalAverageSource",
    "QuoteSource",
    "RadiusSearchSource",
    "StationByIdSource",
    "select_station",
]
