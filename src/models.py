"""Airport and route records shared by every stage of the pipeline."""

from dataclasses import dataclass
from typing import NamedTuple, Optional


@dataclass(frozen=True)
class Airport:
    """One airport as stored in the sealed directory.

    `primary_code` is the ICAO code and the only join key. `alternate_code`
    is the IATA code, which several airports may share; it is used for
    display and lookup only.
    """

    primary_code: str
    alternate_code: Optional[str]
    name: str
    latitude: float
    longitude: float

    @property
    def position(self):
        """(longitude, latitude), the order every geometry call expects."""
        return (self.longitude, self.latitude)

    @property
    def display_code(self):
        return self.alternate_code or self.primary_code

    def has_valid_coordinates(self):
        lat, lon = self.latitude, self.longitude
        # NaN fails both comparisons.
        return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def route_key(a, b):
    """Order-independent key for the airport pair a/b."""
    return (a, b) if a <= b else (b, a)


class Route(NamedTuple):
    origin: str
    destination: str

    @property
    def key(self):
        return route_key(self.origin, self.destination)

    @property
    def id(self):
        return f"{self.origin}-{self.destination}"

    def touches(self, code):
        return code == self.origin or code == self.destination
