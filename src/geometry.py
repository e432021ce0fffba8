"""Great-circle route geometry as GeoJSON dicts.

Every coordinate handed to or returned from this module is
(longitude, latitude), the GeoJSON order. `Airport.position` is the only
place an airport is turned into a coordinate.
"""

import logging
import math
import time

from src.config import GREAT_CIRCLE_POINTS

log = logging.getLogger("routemap")

_EPSILON = 1e-12


class RouteEndpointError(KeyError):
    """A route names an airport missing from the directory.

    Routes are filtered before they reach this module, so this means the
    dataset was assembled wrongly.
    """


def _angular_distance(phi1, lam1, phi2, lam2):
    h = (
        math.sin((phi2 - phi1) / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin((lam2 - lam1) / 2) ** 2
    )
    return 2 * math.asin(min(1.0, math.sqrt(h)))


def interpolate(start, end, npoints=GREAT_CIRCLE_POINTS):
    """Points along the shortest arc from start to end, endpoints included."""
    if npoints < 2:
        raise ValueError("npoints must be at least 2")
    lon1, lat1 = start
    lon2, lat2 = end
    phi1, lam1 = math.radians(lat1), math.radians(lon1)
    phi2, lam2 = math.radians(lat2), math.radians(lon2)

    d = _angular_distance(phi1, lam1, phi2, lam2)
    if d < _EPSILON:
        return [[lon1, lat1], [lon2, lat2]]
    if math.pi - d < 1e-9:
        raise ValueError(f"No unique great circle between antipodal points {start} and {end}")

    sin_d = math.sin(d)
    x1, y1, z1 = math.cos(phi1) * math.cos(lam1), math.cos(phi1) * math.sin(lam1), math.sin(phi1)
    x2, y2, z2 = math.cos(phi2) * math.cos(lam2), math.cos(phi2) * math.sin(lam2), math.sin(phi2)

    points = [[lon1, lat1]]
    for i in range(1, npoints - 1):
        f = i / (npoints - 1)
        a = math.sin((1 - f) * d) / sin_d
        b = math.sin(f * d) / sin_d
        x = a * x1 + b * x2
        y = a * y1 + b * y2
        z = a * z1 + b * z2
        lat = math.degrees(math.atan2(z, math.sqrt(x * x + y * y)))
        lon = math.degrees(math.atan2(y, x))
        points.append([lon, lat])
    points.append([lon2, lat2])
    return points


def split_antimeridian(points):
    """Split a polyline wherever it jumps across the 180th meridian."""
    segments = [[points[0]]]
    for prev, cur in zip(points, points[1:]):
        prev_lon, prev_lat = prev
        lon, lat = cur
        if abs(lon - prev_lon) <= 180:
            segments[-1].append(cur)
            continue
        edge = 180.0 if prev_lon > 0 else -180.0
        shifted = lon + 360 if prev_lon > 0 else lon - 360
        t = (edge - prev_lon) / (shifted - prev_lon)
        crossing_lat = prev_lat + t * (lat - prev_lat)
        if prev_lon != edge:
            segments[-1].append([edge, crossing_lat])
        segments.append([[-edge, crossing_lat], cur])

    # A point sitting exactly on the meridian leaves a zero-length piece.
    segments = [s for s in segments if any(p != s[0] for p in s[1:])]
    return segments or [points]


def great_circle(start, end, npoints=GREAT_CIRCLE_POINTS):
    """GeoJSON geometry for the great circle between two (lon, lat) points."""
    segments = split_antimeridian(interpolate(start, end, npoints))
    if len(segments) == 1:
        return {"type": "LineString", "coordinates": segments[0]}
    return {"type": "MultiLineString", "coordinates": segments}


def _endpoint(directory, code, route):
    airport = directory.get(code)
    if airport is None:
        raise RouteEndpointError(f"Route {route.id} references {code}, which is not in the directory")
    return airport


def route_feature(route, directory, npoints=GREAT_CIRCLE_POINTS):
    origin = _endpoint(directory, route.origin, route)
    destination = _endpoint(directory, route.destination, route)
    return {
        "type": "Feature",
        "id": route.id,
        "geometry": great_circle(origin.position, destination.position, npoints),
        "properties": {"origin": route.origin, "destination": route.destination},
    }


def feature_collection(features):
    return {"type": "FeatureCollection", "features": list(features)}


def plot_route_paths(routes, directory, npoints=GREAT_CIRCLE_POINTS):
    """FeatureCollection of great-circle paths, one feature per route."""
    start = time.perf_counter()
    features = []
    for route in routes:
        try:
            features.append(route_feature(route, directory, npoints))
        except ValueError as exc:
            log.warning("Skipping route %s: %s", route.id, exc)
    log.info(
        "Built %d great-circle paths in %.1f ms",
        len(features), (time.perf_counter() - start) * 1000,
    )
    return feature_collection(features)


def _iter_positions(geometry):
    if geometry["type"] == "LineString":
        yield from geometry["coordinates"]
    elif geometry["type"] == "MultiLineString":
        for line in geometry["coordinates"]:
            yield from line
    elif geometry["type"] == "Point":
        yield geometry["coordinates"]


def bounding_box(collection):
    """(min_lon, min_lat, max_lon, max_lat) clamped to valid ranges, or None."""
    lons = []
    lats = []
    for feature in collection["features"]:
        for lon, lat in _iter_positions(feature["geometry"]):
            lons.append(lon)
            lats.append(lat)
    if not lons:
        return None
    return (
        max(-180.0, min(lons)),
        max(-90.0, min(lats)),
        min(180.0, max(lons)),
        min(90.0, max(lats)),
    )
