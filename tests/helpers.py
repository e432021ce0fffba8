def airport_row(icao, iata, name, lat, lon, airport_id="1"):
    """A 14-column airports.dat row."""
    return [
        airport_id, name, "City", "Country", iata, icao, str(lat), str(lon),
        "100", "0", "E", "Europe/London", "airport", "OurAirports",
    ]


def route_row(origin, destination, airline="XX"):
    """A 9-column routes.dat row."""
    return [airline, "1", origin, "1", destination, "2", "", "0", "320"]


def write_rows(path, rows):
    path.write_text("\n".join(",".join(f'"{c}"' if "," in c else c for c in row) for row in rows) + "\n",
                    encoding="utf-8")
    return path
