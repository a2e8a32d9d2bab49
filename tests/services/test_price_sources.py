from __future__ import annotations

from decimal import Decimal
from typing import cast

import pytest

from clients.errors import SourceMalformed, SourceRejected, SourceUnreachable
from clients.national_average import NationalAverage, NationalAverageClient
from clients.tankerkoenig import StationDetail, StationRecord, TankerkoenigClient
from domain.prices import FuelPrices, SearchPoint
from services.price_sources import (
    GENERIC_STATION_LABEL,
    NationalAverageSource,
    QuoteSource,
    RadiusSearchSource,
    StationByIdSource,
    select_station,
)

POINT = SearchPoint(latitude=49.91, longitude=8.58, radius_km=5)


class _StubTankerkoenigClient:
    def __init__(
        self,
        *,
        detail: StationDetail | Exception | None = None,
        prices: dict[str, FuelPrices] | Exception | None = None,
        stations: list[StationRecord] | Exception | None = None,
    ) -> None:
        self.detail = detail
        self.prices = prices
        self.stations = stations
        self.calls: list[tuple[str, object]] = []

    def get_station_detail(self, station_id: str) -> StationDetail:
        self.calls.append(("detail", station_id))
        return self._result(self.detail)

    def get_prices(self, station_ids: list[str]) -> dict[str, FuelPrices]:
        self.calls.append(("prices", list(station_ids)))
        return self._result(self.prices)

    def list_stations(self, point: SearchPoint, *, sort: str = "dist", fuel_type: str = "all") -> list[StationRecord]:
        self.calls.append(("list", sort))
        return self._result(self.stations)

    @staticmethod
    def _result(value):  # type: ignore[no-untyped-def]
        if isinstance(value, Exception):
            raise value
        return value


def _station(name: str, brand: str, e5: str) -> StationRecord:
    return StationRecord(id=name.lower(), name=name, brand=brand, prices=FuelPrices(e5=Decimal(e5)))


def test_station_source_combines_detail_label_and_prices() -> None:
    prices = FuelPrices(e5=Decimal("1.799"), e10=Decimal("1.739"), diesel=Decimal("1.699"))
    client = _StubTankerkoenigClient(detail=StationDetail(name="Weiterstadt", brand="Aral"), prices={"123": prices})
    source = StationByIdSource(client=cast(TankerkoenigClient, client), station_id="123")

    quote = source.fetch_quote()

    assert quote.station_label == "Aral Weiterstadt"
    assert quote.fuel_prices == prices
    assert quote.freshness_label == "Live (Tankerkönig)"
    assert quote.source == "tankerkoenig-station"
    assert client.calls == [("detail", "123"), ("prices", ["123"])]


def test_station_source_uses_generic_label_when_detail_fails() -> None:
    client = _StubTankerkoenigClient(
        detail=SourceUnreachable("timeout"),
        prices={"123": FuelPrices(e5=Decimal("1.8"))},
    )
    source = StationByIdSource(client=cast(TankerkoenigClient, client), station_id="123")

    quote = source.fetch_quote()

    assert quote.station_label == GENERIC_STATION_LABEL
    assert quote.fuel_prices.e5 == Decimal("1.8")


def test_station_source_fails_when_station_missing_from_prices() -> None:
    client = _StubTankerkoenigClient(detail=StationDetail(name="X", brand=""), prices={"999": FuelPrices()})
    source = StationByIdSource(client=cast(TankerkoenigClient, client), station_id="123")

    with pytest.raises(SourceMalformed):
        source.fetch_quote()


@pytest.mark.parametrize(("has_client", "station_id"), [(False, "123"), (True, None), (True, "")])
def test_station_source_needs_client_and_station_id(has_client: bool, station_id: str | None) -> None:
    client = cast(TankerkoenigClient, _StubTankerkoenigClient()) if has_client else None

    assert not StationByIdSource(client=client, station_id=station_id).is_configured()


def test_search_source_selects_filtered_station_regardless_of_order() -> None:
    esso = _station("Esso", "Esso", "1.8")
    lenz = _station("Lenz Energie", "Lenz", "1.7")
    for stations in ([esso, lenz], [lenz, esso]):
        client = _StubTankerkoenigClient(stations=stations)
        source = RadiusSearchSource(client=cast(TankerkoenigClient, client), point=POINT, name_filter="lenz")

        quote = source.fetch_quote()

        assert quote.station_label == "Lenz Energie"
        assert quote.fuel_prices.e5 == Decimal("1.7")
        assert quote.freshness_label == "Live"
        assert client.calls == [("list", "dist")]


def test_search_source_takes_nearest_station_without_filter() -> None:
    client = _StubTankerkoenigClient(stations=[_station("Esso", "Esso", "1.8"), _station("Aral", "Aral", "1.7")])
    source = RadiusSearchSource(client=cast(TankerkoenigClient, client), point=POINT, name_filter="  ")

    quote = source.fetch_quote()

    assert quote.station_label == "Esso"


@pytest.mark.parametrize(
    ("stations", "name_filter"),
    [([], None), ([], "lenz"), ([_station("Esso", "Esso", "1.8")], "lenz")],
)
def test_search_source_rejects_when_nothing_matches(stations: list[StationRecord], name_filter: str | None) -> None:
    client = _StubTankerkoenigClient(stations=stations)
    source = RadiusSearchSource(client=cast(TankerkoenigClient, client), point=POINT, name_filter=name_filter)

    with pytest.raises(SourceRejected):
        source.fetch_quote()


def test_select_station_matches_brand_case_insensitively() -> None:
    stations = [_station("Tankstelle Nord", "ESSO", "1.8"), _station("Freie Tankstelle", "LENZ", "1.7")]

    selected = select_station(stations, "Lenz")

    assert selected is stations[1]


def test_national_average_source_uses_reported_date() -> None:
    average = NationalAverage(
        date_label="2026-02-20 18:50:01",
        prices=FuelPrices(e5=Decimal("1.813"), e10=Decimal("1.756"), diesel=Decimal("1.714")),
    )

    class _StubAverageClient:
        def get_average(self) -> NationalAverage:
            return average

    source = NationalAverageSource(client=cast(NationalAverageClient, _StubAverageClient()))

    quote = source.fetch_quote()

    assert quote.station_label == "Bundesdurchschnitt"
    assert quote.freshness_label == "2026-02-20 18:50:01"
    assert quote.fuel_prices == average.prices
    assert not NationalAverageSource(client=None).is_configured()


@pytest.mark.parametrize(
    "source",
    [
        StationByIdSource(client=None, station_id="123"),
        RadiusSearchSource(client=None, point=POINT),
        NationalAverageSource(client=None),
    ],
)
def test_unconfigured_sources_refuse_to_fetch(source: QuoteSource) -> None:
    with pytest.raises(RuntimeError, match="is not configured"):
        source.fetch_quote()
