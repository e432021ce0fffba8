#!/usr/bin/env python3
"""CLI entry point for exporting the route network as GeoJSON.

Usage:
    python visualize.py                             # whole network
    python visualize.py --airport LHR               # one airport's routes
    python visualize.py --output my_routes.geojson  # custom output path
    python visualize.py --routes demo.csv --route-layout compact
"""

import argparse

from src.config import AIRPORTS_PATH, OUTPUT_DIR, ROUTE_LAYOUT, ROUTES_PATH, setup_logging
from src.dataset import load_dataset
from src.openflights import list_layouts
from src.viz.geojson_export import export_network

log = setup_logging()


def main():
    layouts = ", ".join(name for name, _ in list_layouts())
    parser = argparse.ArgumentParser(description="Export the flight route network as GeoJSON.")
    parser.add_argument("--airports", type=str, default=AIRPORTS_PATH, help="Airport file path or URL")
    parser.add_argument("--routes", type=str, default=ROUTES_PATH, help="Route file path or URL")
    parser.add_argument("--route-layout", type=str, default=ROUTE_LAYOUT,
                        help=f"Column layout of the route file. Available: {layouts}")
    parser.add_argument("--airport", type=str, default=None,
                        help="Only export routes touching this ICAO/IATA code")
    parser.add_argument("--all-airports", action="store_true",
                        help="Keep airports without any route in the directory")
    parser.add_argument("--output", "-o", type=str, default=None, help="Output GeoJSON path")
    args = parser.parse_args()

    out_path = args.output or str(OUTPUT_DIR / "route_network.geojson")
    dataset = load_dataset(
        args.airports, args.routes,
        route_layout=args.route_layout,
        routed_only=not args.all_airports,
    )
    try:
        export_network(dataset, out_path, airport=args.airport)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
