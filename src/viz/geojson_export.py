"""GeoJSON export of the route network for a map renderer.

Lines  = unique routes as great-circle paths (one per airport pair)
Points = airports served by those routes (sized by total flights)
"""

import json
import logging
import math
from pathlib import Path

from src.geometry import feature_collection
from src.stats import flight_stats

log = logging.getLogger("routemap")


def _airport_feature(airport, stats, selected=False, connected=False):
    return {
        "type": "Feature",
        "id": airport.primary_code,
        "geometry": {"type": "Point", "coordinates": list(airport.position)},
        "properties": {
            "kind": "airport",
            "icao": airport.primary_code,
            "iata": airport.alternate_code,
            "label": airport.display_code,
            "name": airport.name,
            "departing": stats.outbound,
            "arriving": stats.inbound,
            "flights": stats.total,
            "size": round(4 + math.sqrt(stats.total) * 1.5, 1),
            "selected": selected,
            "connected": connected,
        },
    }


def build_network_geojson(dataset, airport=None):
    """FeatureCollection of route paths and airport points.

    With `airport`, only that airport's routes and partners are included and
    the points are flagged `selected` / `connected`.
    """
    selected = None
    if airport is not None:
        selected = dataset.resolve(airport)
        if selected is None or selected not in dataset.airports:
            raise ValueError(f"Unknown airport '{airport}'")
        routes = dataset.routes_for(selected)
        connected = dataset.connected(selected)
        codes = {selected} | connected
    else:
        routes = dataset.unique_routes
        connected = frozenset()
        codes = dataset.airports.keys()

    paths = dataset.paths(routes)
    for feature in paths["features"]:
        feature["properties"]["kind"] = "route"

    points = []
    for code in sorted(codes):
        ap = dataset.airports[code]
        points.append(_airport_feature(
            ap, flight_stats(dataset, code),
            selected=code == selected, connected=code in connected,
        ))

    return feature_collection(paths["features"] + points)


def write_geojson(collection, output_path):
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(collection, separators=(",", ":")), encoding="utf-8")
    return output_path


def export_network(dataset, output_path, airport=None):
    """Write the network GeoJSON file. Returns the written path."""
    collection = build_network_geojson(dataset, airport)
    path = write_geojson(collection, output_path)
    kinds = [f["properties"]["kind"] for f in collection["features"]]
    log.info(
        "GeoJSON written to %s (%d airports, %d routes)",
        path, kinds.count("airport"), kinds.count("route"),
    )
    return path
