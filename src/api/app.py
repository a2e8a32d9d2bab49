import logging
from contextlib import asynccontextmanager
from time import perf_counter
from typing import Annotated, AsyncGenerator, Awaitable, Callable

import requests
from fastapi import Depends, FastAPI, Form, Request, Response, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from api.auth import check_password, is_authenticated, set_auth_cookie
from api.dependencies import get_price_resolver, get_settings, get_templates
from api.views import fuel_rows
from config import AppSettings
from services.price_resolver import PriceResolver

logger = logging.getLogger(__name__)

REFRESH_SECONDS = 60


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    session = requests.Session()
    fastapi_app.state.http_session = session
    yield
    session.close()


app = FastAPI(lifespan=lifespan, title="Kraftstoff Dashboard")


@app.middleware("http")
async def log_process_time(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    start_time = perf_counter()
    response = await call_next(request)
    process_time = perf_counter() - start_time
    logger.info("Request time: %s %s: %.4fs", request.method, request.url.path, process_time)
    return response


@app.get("/", response_class=HTMLResponse)
def dashboard(
    request: Request,
    settings: Annotated[AppSettings, Depends(get_settings)],
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
    resolver: Annotated[PriceResolver, Depends(get_price_resolver)],
) -> Response:
    if not is_authenticated(request, settings):
        return templates.TemplateResponse(request, "login.html")

    quote = resolver.resolve()
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"quote": quote, "rows": fuel_rows(quote), "refresh_seconds": REFRESH_SECONDS},
    )


@app.post("/login", response_class=HTMLResponse)
def login(
    request: Request,
    password: Annotated[str, Form()],
    settings: Annotated[AppSettings, Depends(get_settings)],
    templates: Annotated[Jinja2Templates, Depends(get_templates)],
) -> Response:
    if not check_password(password, settings):
        logger.warning("Rejected dashboard login from %s", request.client.host if request.client else "unknown")
        return templates.TemplateResponse(request, "wrong_password.html", status_code=status.HTTP_401_UNAUTHORIZED)

    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    set_auth_cookie(response)
    return response


@app.get("/health", response_class=PlainTextResponse)
@app.get("/kaithhealth", response_class=PlainTextResponse)
def health() -> str:
    return "ok"
