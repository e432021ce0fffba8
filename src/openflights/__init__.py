"""OpenFlights source formats -- maps route layout names to their columns."""

from typing import NamedTuple


class RouteLayout(NamedTuple):
    name: str
    description: str
    origin: int
    destination: int

    @property
    def min_columns(self):
        return max(self.origin, self.destination) + 1


ROUTE_LAYOUTS = {
    "openflights": RouteLayout(
        name="openflights",
        description="routes.dat (airline,airline_id,src,src_id,dst,dst_id,...)",
        origin=2,
        destination=4,
    ),
    "compact": RouteLayout(
        name="compact",
        description="label,origin,destination export",
        origin=1,
        destination=2,
    ),
}


def get_layout(name):
    """Return route layout by name, or raise ValueError."""
    if isinstance(name, RouteLayout):
        return name
    key = name.lower()
    if key not in ROUTE_LAYOUTS:
        available = ", ".join(f"{k} ({v.description})" for k, v in ROUTE_LAYOUTS.items())
        raise ValueError(f"Unknown route layout '{name}'. Available: {available}")
    return ROUTE_LAYOUTS[key]


def list_layouts():
    """Return list of (name, description) tuples for all route layouts."""
    return [(k, v.description) for k, v in ROUTE_LAYOUTS.items()]


from src.openflights.parser import read_rows, parse_airports, parse_routes   # noqa: E402, F401
