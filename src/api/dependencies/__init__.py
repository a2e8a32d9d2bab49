from pathlib import Path
from typing import Annotated

import requests
from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from api.views import format_price
from config import AppSettings, config
from services.price_resolver import PriceResolver, build_resolver

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["price"] = format_price


def get_settings() -> AppSettings:
    return config()


def get_templates() -> Jinja2Templates:
    return templates


def get_http_session(request: Request) -> requests.Session:
    return request.app.state.http_session


def get_price_resolver(
    settings: Annotated[AppSettings, Depends(get_settings)],
    session: Annotated[requests.Session, Depends(get_http_session)],
) -> PriceResolver:
    # Built per request; only the HTTP connection pool is shared.
    return build_resolver(settings.resolver_config(), session=session)
