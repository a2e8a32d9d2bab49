from __future__ import annotations

from functools import cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.prices import SearchPoint
from services.price_resolver import DEFAULT_SOURCE_ORDER, ResolverConfig, SourceKind, parse_source_order


class AppSettings(BaseSettings):
    """Environment-driven settings. Empty values switch the matching feature off."""

    tankerkoenig_api_key: str = ""
    station_id: str = ""
    search_lat: float | None = Field(default=None, ge=-90, le=90)
    search_lng: float | None = Field(default=None, ge=-180, le=180)
    search_radius_km: float = Field(default=5.0, gt=0, le=25)
    station_name_filter: str = ""
    national_average_url: str = ""
    source_order: str = ",".join(kind.value for kind in DEFAULT_SOURCE_ORDER)
    fallback_label: str = ""

    dashboard_password: str = ""
    port: int = 8080
    http_connect_timeout: float = Field(default=5.0, gt=0)
    http_read_timeout: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True, extra="ignore"
    )

    @field_validator("source_order")
    @classmethod
    def _validate_source_order(cls, value: str) -> str:
        parse_source_order(value)
        return value

    @property
    def search_point(self) -> SearchPoint | None:
        if self.search_lat is None or self.search_lng is None:
            return None
        return SearchPoint(latitude=self.search_lat, longitude=self.search_lng, radius_km=self.search_radius_km)

    @property
    def sources(self) -> tuple[SourceKind, ...]:
        return parse_source_order(self.source_order)

    def resolver_config(self) -> ResolverConfig:
        return ResolverConfig(
            api_key=self.tankerkoenig_api_key,
            station_id=self.station_id,
            search_point=self.search_point,
            station_name_filter=self.station_name_filter,
            average_url=self.national_average_url,
            source_order=self.sources,
            fallback_label=self.fallback_label,
            connect_timeout=self.http_connect_timeout,
            read_timeout=self.http_read_timeout,
        )


@cache
def config() -> AppSettings:
    return AppSettings()


__all__ = ["AppSettings", "config"]
