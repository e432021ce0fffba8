#!/usr/bin/env python3
"""CLI entry point for querying the route network.

Usage:
    python query.py stats                     # network totals
    python query.py airport LHR               # flights + top partners for one airport
    python query.py airport EGLL --top 5
    python query.py search zurich             # diacritic-insensitive airport search
    python query.py search "san " --limit 20
"""

import argparse
import sys

from src.config import (
    AIRPORTS_PATH, ROUTE_LAYOUT, ROUTES_PATH, SEARCH_LIMIT, TOP_CONNECTIONS, setup_logging,
)
from src.session import FlightSession

log = setup_logging()


def _label(airport):
    if airport is None:
        return "?"
    iata = airport.alternate_code or "---"
    return f"{iata} {airport.primary_code}  {airport.name}"


def show_stats(session):
    totals = session.totals()
    print(f"Airports        {totals.airports:>10,}")
    print(f"Total flights   {totals.flights:>10,}")
    print(f"Directed routes {totals.directed_routes:>10,}")
    print(f"Unique routes   {totals.unique_routes:>10,}")


def show_airport(session, code, top):
    try:
        airport = session.select(code)
    except ValueError as exc:
        log.error("%s", exc)
        sys.exit(1)
    stats = session.selected_stats()
    print(_label(airport))
    print(f"  lat {airport.latitude:.4f}, lon {airport.longitude:.4f}")
    print(f"  departing {stats.outbound}, arriving {stats.inbound}, total {stats.total}")
    connections = session.selected_connections(top)
    for title, rows in (("Top destinations", connections.outbound),
                        ("Top origins", connections.inbound)):
        print(f"  {title}:")
        for row in rows:
            print(f"    {row.count:>4}  {_label(row.airport)}")


def show_search(session, query, limit):
    results = session.search(query, limit)
    if not results:
        print("No airports found.")
    for airport in results:
        print(_label(airport))


def main():
    parser = argparse.ArgumentParser(description="Query the flight route network.")
    parser.add_argument("--airports", type=str, default=AIRPORTS_PATH)
    parser.add_argument("--routes", type=str, default=ROUTES_PATH)
    parser.add_argument("--route-layout", type=str, default=ROUTE_LAYOUT)
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("stats", help="Network totals")
    p_airport = sub.add_parser("airport", help="Statistics for one airport")
    p_airport.add_argument("code")
    p_airport.add_argument("--top", type=int, default=TOP_CONNECTIONS)
    p_search = sub.add_parser("search", help="Search airports by code or name")
    p_search.add_argument("query")
    p_search.add_argument("--limit", type=int, default=SEARCH_LIMIT)
    args = parser.parse_args()

    with FlightSession(args.airports, args.routes, route_layout=args.route_layout) as session:
        session.load()
        session.wait()
        if args.command == "stats":
            show_stats(session)
        elif args.command == "airport":
            show_airport(session, args.code, args.top)
        else:
            show_search(session, args.query, args.limit)


if __name__ == "__main__":
    main()
