from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Iterator, Sequence

import requests

from clients.errors import PriceSourceError
from clients.national_average import NationalAverageClient
from clients.tankerkoenig import TankerkoenigClient
from domain.prices import PriceQuote, SearchPoint

from .price_sources import (
    GENERIC_STATION_LABEL,
    NATIONAL_AVERAGE_LABEL,
    NationalAverageSource,
    QuoteSource,
    RadiusSearchSource,
    StationByIdSource,
)

logger = logging.getLogger(__name__)

NEARBY_STATIONS_LABEL = "Tankstellen in der Nähe"


class SourceKind(StrEnum):
    STATION = "station"
    SEARCH = "search"
    AVERAGE = "average"


DEFAULT_SOURCE_ORDER: tuple[SourceKind, ...] = (SourceKind.STATION, SourceKind.SEARCH, SourceKind.AVERAGE)


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceOutcome:
    source: str
    status: OutcomeStatus
    quote: PriceQuote | None = None
    reason: str | None = None


@dataclass(frozen=True)
class ResolverConfig:
    """Everything the resolver needs, decoupled from where the values come from."""

    api_key: str | None = None
    station_id: str | None = None
    search_point: SearchPoint | None = None
    station_name_filter: str | None = None
    average_url: str | None = None
    source_order: tuple[SourceKind, ...] = DEFAULT_SOURCE_ORDER
    fallback_label: str | None = None
    connect_timeout: float = 5.0
    read_timeout: float = 10.0

    def __post_init__(self) -> None:
        for name in ("api_key", "station_id", "station_name_filter", "average_url", "fallback_label"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, value.strip() or None)
        object.__setattr__(self, "source_order", parse_source_order(self.source_order))
        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ValueError("timeouts must be > 0")


@dataclass
class PriceResolver:
    """Walks the configured sources in order and returns the first quote that works.

    Never raises: when every source is skipped or fails, a zero-filled placeholder
    quote with ``fallback_label`` is returned instead.
    """

    sources: Sequence[QuoteSource]
    fallback_label: str = GENERIC_STATION_LABEL

    def attempts(self) -> Iterator[SourceOutcome]:
        for source in self.sources:
            outcome = self._attempt(source)
            yield outcome
            if outcome.status is OutcomeStatus.SUCCESS:
                return

    def resolve(self) -> PriceQuote:
        quote, _ = self.resolve_with_outcomes()
        return quote

    def resolve_with_outcomes(self) -> tuple[PriceQuote, list[SourceOutcome]]:
        outcomes = list(self.attempts())
        for outcome in outcomes:
            if outcome.status is OutcomeStatus.SUCCESS and outcome.quote is not None:
                logger.info("Resolved prices from %s", outcome.source)
                return outcome.quote, outcomes

        logger.warning("No price source succeeded, rendering placeholder for %s", self.fallback_label)
        return PriceQuote.placeholder(self.fallback_label), outcomes

    @staticmethod
    def _attempt(source: QuoteSource) -> SourceOutcome:
        if not source.is_configured():
            logger.debug("Skipping %s: not configured", source.source_name)
            return SourceOutcome(source=source.source_name, status=OutcomeStatus.SKIPPED, reason="not configured")

        try:
            quote = source.fetch_quote()
        except PriceSourceError as exc:
            logger.warning("Price source %s failed (%s): %s", source.source_name, type(exc).__name__, exc)
            return SourceOutcome(source=source.source_name, status=OutcomeStatus.FAILED, reason=str(exc))
        except Exception as exc:
            logger.exception("Price source %s raised unexpectedly", source.source_name)
            return SourceOutcome(source=source.source_name, status=OutcomeStatus.FAILED, reason=repr(exc))

        return SourceOutcome(source=source.source_name, status=OutcomeStatus.SUCCESS, quote=quote)


def default_fallback_label(config: ResolverConfig) -> str:
    if config.fallback_label:
        return config.fallback_label
    if config.station_id:
        return GENERIC_STATION_LABEL
    if config.search_point is not None:
        if config.station_name_filter:
            return config.station_name_filter.strip().title()
        return NEARBY_STATIONS_LABEL
    return NATIONAL_AVERAGE_LABEL


def build_sources(config: ResolverConfig, *, session: requests.Session | None = None) -> list[QuoteSource]:
    if session is None and (config.api_key or config.average_url):
        # One pool shared by both clients.
        session = requests.Session()

    tankerkoenig: TankerkoenigClient | None = None
    if config.api_key:
        tankerkoenig = TankerkoenigClient(
            api_key=config.api_key,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            session=session,
        )

    average: NationalAverageClient | None = None
    if config.average_url:
        average = NationalAverageClient(
            url=config.average_url,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            session=session,
        )

    by_kind: dict[SourceKind, QuoteSource] = {
        SourceKind.STATION: StationByIdSource(client=tankerkoenig, station_id=config.station_id),
        SourceKind.SEARCH: RadiusSearchSource(
            client=tankerkoenig,
            point=config.search_point,
            name_filter=config.station_name_filter,
        ),
        SourceKind.AVERAGE: NationalAverageSource(client=average),
    }
    return [by_kind[kind] for kind in config.source_order]


def build_resolver(config: ResolverConfig, *, session: requests.Session | None = None) -> PriceResolver:
    return PriceResolver(
        sources=build_sources(config, session=session),
        fallback_label=default_fallback_label(config),
    )


def resolve(config: ResolverConfig, *, session: requests.Session | None = None) -> PriceQuote:
    return build_resolver(config, session=session).resolve()


def parse_source_order(raw: str | Iterable[str]) -> tuple[SourceKind, ...]:
    """Parse ``"station,search,average"`` (or a list of names) into source kinds."""
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    names = [str(item).strip().lower() for item in items if item and str(item).strip()]
    if not names:
        raise ValueError("source order must name at least one source")
    try:
        order = tuple(SourceKind(name) for name in names)
    except ValueError as exc:
        valid = ", ".join(kind.value for kind in SourceKind)
        raise ValueError(f"unknown price source in {names!r}; expected any of: {valid}") from exc
    if len(set(order)) != len(order):
        raise ValueError(f"source order must not repeat a source: {names!r}")
    return order


__all__ = [
    "DEFAULT_SOURCE_ORDER",
    "OutcomeStatus",
    "PriceResolver",
    "ResolverConfig",
    "SourceKind",
    "SourceOutcome",
    "build_resolver",
    "build_sources",
    "default_fallback_label",
    "parse_source_order",
    "resolve",
]
