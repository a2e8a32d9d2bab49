from __future__ import annotations

from typing import Any

import requests


class PriceSourceError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None, payload: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class SourceUnreachable(PriceSourceError):
    """Connection failure or timeout before a response arrived."""


class SourceRejected(PriceSourceError):
    """Upstream answered, but with a non-2xx status or an explicit ``ok: false``."""


class SourceMalformed(PriceSourceError):
    """Response body is not the JSON shape we expect."""


def get_json(
    session: requests.Session,
    url: str,
    *,
    params: dict[str, Any] | None,
    timeout: tuple[float, float],
    provider: str,
) -> dict[str, Any]:
    """Issue a GET and return the decoded JSON object, mapping failures onto the taxonomy above."""
    try:
        response = session.request("GET", url, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as exc:
        resp = exc.response
        status_code = getattr(resp, "status_code", None)
        payload: Any | None = None
        if resp is not None:
            try:
                payload = resp.json()
            except ValueError:
                payload = resp.text
        raise SourceRejected(f"{provider} request failed", status_code=status_code, payload=payload) from exc
    except (requests.ConnectionError, requests.Timeout) as exc:
        raise SourceUnreachable(f"{provider} is unreachable: {exc}") from exc
    except requests.RequestException as exc:
        status_code = getattr(getattr(exc, "response", None), "status_code", None)
        raise SourceUnreachable(f"{provider} request failed", status_code=status_code) from exc

    try:
        payload_raw = response.json()
    except ValueError as exc:
        raise SourceMalformed(f"{provider} returned invalid JSON", payload=response.text) from exc

    if not isinstance(payload_raw, dict):
        raise SourceMalformed(f"{provider} returned unexpected payload type", payload=payload_raw)

    return payload_raw


__all__ = ["PriceSourceError", "SourceMalformed", "SourceRejected", "SourceUnreachable", "get_json"]
