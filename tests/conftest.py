import pytest

from src.dataset import build_dataset
from tests.helpers import airport_row, route_row


@pytest.fixture
def airport_rows():
    return [
        airport_row("EGLL", "LHR", "London Heathrow Airport", 51.4706, -0.461941),
        airport_row("LSZH", "ZRH", "Zürich Airport", 47.464699, 8.54917),
        airport_row("KJFK", "JFK", "John F Kennedy International Airport", 40.63980103, -73.77890015),
        airport_row("LFPG", "CDG", "Charles de Gaulle International Airport", 49.012798, 2.55),
        airport_row("RJTT", "HND", "Tokyo Haneda International Airport", 35.552299, 139.779999),
        airport_row("YSSY", "SYD", "Sydney Kingsford Smith International Airport", -33.9461, 151.177002),
        airport_row("EGKK", "\\N", "London Gatwick Airport", 51.148102, -0.190278),
        airport_row("LEMD", "MAD", "Adolfo Suárez Madrid–Barajas Airport", 40.471926, -3.56264),
        airport_row("XBAD", "BAD", "Broken Coordinates", 95, 10),
        airport_row("\\N", "NOP", "No Code Field", 10, 10),
    ]


@pytest.fixture
def route_rows():
    return [
        route_row("LHR", "JFK", "BA"),
        route_row("JFK", "LHR", "BA"),
        route_row("LHR", "JFK", "AA"),
        route_row("LHR", "ZRH", "LX"),
        route_row("ZRH", "LHR", "LX"),
        route_row("CDG", "JFK", "AF"),
        route_row("HND", "SYD", "QF"),
        route_row("LHR", "ZZZ", "XX"),
        route_row("EGKK", "LSZH", "U2"),
        route_row("BAD", "LHR", "XX"),
    ]


@pytest.fixture
def dataset(airport_rows, route_rows):
    return build_dataset(airport_rows, route_rows)
