# flake8: noqa E402
# Run via uv for access to dev deps, e.g.:
# uv run scripts/price_resolver_probe.py --lat 49.91 --lng 8.58 --filter lenz --order search
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import requests

# Ensure the src directory is importable when the script is invoked via uv/python directly.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from api.views import fuel_rows
from config import config
from domain.prices import SearchPoint
from services.price_resolver import build_resolver, parse_source_order


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show which price source answers for the current settings.")
    parser.add_argument("--station-id", help="Override STATION_ID.")
    parser.add_argument("--lat", type=float, help="Override SEARCH_LAT.")
    parser.add_argument("--lng", type=float, help="Override SEARCH_LNG.")
    parser.add_argument("--radius", type=float, help="Override SEARCH_RADIUS_KM.")
    parser.add_argument("--filter", dest="name_filter", help="Override STATION_NAME_FILTER.")
    parser.add_argument("--order", help="Override SOURCE_ORDER, e.g. search,average.")
    parser.add_argument("--verbose", action="store_true", help="Log each upstream call.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    settings = config()
    resolver_config = settings.resolver_config()
    if args.station_id is not None:
        resolver_config = replace(resolver_config, station_id=args.station_id)
    if args.lat is not None and args.lng is not None:
        radius = args.radius or settings.search_radius_km
        resolver_config = replace(resolver_config, search_point=SearchPoint(args.lat, args.lng, radius))
    if args.name_filter is not None:
        resolver_config = replace(resolver_config, station_name_filter=args.name_filter)
    if args.order:
        resolver_config = replace(resolver_config, source_order=parse_source_order(args.order))

    with requests.Session() as session:
        quote, outcomes = build_resolver(resolver_config, session=session).resolve_with_outcomes()
    for idx, outcome in enumerate(outcomes, start=1):
        detail = f" ({outcome.reason})" if outcome.reason else ""
        print(f"[source {idx}] {outcome.source}: {outcome.status.value}{detail}")

    print(f"Station: {quote.station_label}")
    for row in fuel_rows(quote):
        print(f"  {row.label:<10} {row.price if row.available else '-'}")
    print(f"Updated: {quote.freshness_label} (source: {quote.source})")


if __name__ == "__main__":
    main()
