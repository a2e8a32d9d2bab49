from typing import Generator

import pytest

from config import config

ENV_VARS = (
    "TANKERKOENIG_API_KEY",
    "STATION_ID",
    "SEARCH_LAT",
    "SEARCH_LNG",
    "SEARCH_RADIUS_KM",
    "STATION_NAME_FILTER",
    "NATIONAL_AVERAGE_URL",
    "SOURCE_ORDER",
    "FALLBACK_LABEL",
    "DASHBOARD_PASSWORD",
    "PORT",
    "HTTP_CONNECT_TIMEOUT",
    "HTTP_READ_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.cache_clear()
    yield
    config.cache_clear()
