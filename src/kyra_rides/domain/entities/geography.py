from dataclasses import dataclass


# Geographic types handed to the distance provider
@dataclass(frozen=True)
class Coord:
    lat: float  # WGS84 degrees
    lng: float


@dataclass(frozen=True)
class Place:
    address: str
    place_id: str
    coord: Coord
