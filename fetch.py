#!/usr/bin/env python3
"""CLI entry point for downloading OpenFlights data.

Usage:
    python fetch.py                       # airports.dat + routes.dat
    python fetch.py --airports-only       # airports.dat only
    python fetch.py --routes-only         # routes.dat only
    python fetch.py --data-dir /tmp/of    # custom target directory
"""

import argparse
import sys
from pathlib import Path

from src.config import DATA_DIR, setup_logging
from src.dataset import load_dataset
from src.openflights.download import download_all
from src.stats import network_totals

log = setup_logging()


def print_summary(dataset):
    totals = network_totals(dataset)
    log.info("=" * 50)
    log.info("DATASET SUMMARY")
    log.info("=" * 50)
    log.info("  %-18s %8d", "airports", totals.airports)
    log.info("  %-18s %8d", "flights", totals.flights)
    log.info("  %-18s %8d", "directed routes", totals.directed_routes)
    log.info("  %-18s %8d", "unique routes", totals.unique_routes)
    ambiguous = dataset.index.ambiguous_alternates
    if ambiguous:
        log.info("  %-18s %8d", "ambiguous IATA", len(ambiguous))
    log.info("=" * 50)


def main():
    parser = argparse.ArgumentParser(description="Download OpenFlights airports and routes.")
    parser.add_argument("--airports-only", action="store_true")
    parser.add_argument("--routes-only", action="store_true")
    parser.add_argument("--data-dir", type=str, default=None)
    args = parser.parse_args()

    data_dir = Path(args.data_dir) if args.data_dir else DATA_DIR
    kinds = None
    if args.airports_only:
        kinds = ["airports"]
    elif args.routes_only:
        kinds = ["routes"]

    log.info("Data directory: %s", data_dir.resolve())
    paths = download_all(data_dir, kinds)
    if not all(paths.values()):
        failed = ", ".join(k for k, p in paths.items() if not p)
        log.error("Download failed: %s", failed)
        sys.exit(1)

    airports = data_dir / "airports.dat"
    routes = data_dir / "routes.dat"
    if airports.exists() and routes.exists():
        print_summary(load_dataset(airports, routes, route_layout="openflights"))


if __name__ == "__main__":
    main()
