# kyra_rides/services/distance.py
import math

from kyra_rides.app.protocols import DistanceProvider
from kyra_rides.domain.entities.geography import Coord

EARTH_RADIUS_KM = 6371.0088


def haversine_km(a: Coord, b: Coord) -> float:
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = phi2 - phi1
    dlmb = math.radians(b.lng - a.lng)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


class HaversineDistanceProvider(DistanceProvider):
    """Offline estimate: great-circle distance stretched by a road factor."""

    def __init__(self, road_factor: float = 1.0, precision: int = 3):
        self.road_factor = road_factor
        self.precision = precision

    def distance_km(self, origin: Coord, dest: Coord) -> float | None:
        d = haversine_km(origin, dest) * self.road_factor
        if not math.isfinite(d):
            return None
        # metre resolution, like a routing API's distance.value / 1000
        return round(d, self.precision)


class FixedDistanceProvider(DistanceProvider):
    """Helper for tests and demos; every lookup returns the same distance."""

    def __init__(self, km: float | None):
        self.km = km
        self.calls = 0

    def distance_km(self, origin: Coord, dest: Coord) -> float | None:
        self.calls += 1
        return self.km
