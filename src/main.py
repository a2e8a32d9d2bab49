from __future__ import annotations

import argparse
import logging
from typing import Sequence

import uvicorn

from config import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> None:
    settings = config()
    # Fail here, not on the first request, when the settings cannot form a resolver.
    settings.resolver_config()
    parser = argparse.ArgumentParser(description="Serve the fuel price dashboard.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)
    logger.info(
        "Price sources: %s (station_id=%s, search=%s)",
        ",".join(kind.value for kind in settings.sources),
        settings.station_id or "-",
        "on" if settings.search_point else "off",
    )
    logger.info("Serving dashboard on http://%s:%d", args.host, args.port)
    uvicorn.run("api.app:app", host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
