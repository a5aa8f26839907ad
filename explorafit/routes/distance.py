# explorafit/routes/distance.py
from math import asin, cos, radians, sin, sqrt
from typing import Iterable, Mapping, Sequence, Tuple, Union

EARTH_RADIUS_M = 6_371_000.0  # mean Earth radius, matches what web map clients use

Point = Union[Tuple[float, float], Sequence[float], Mapping[str, float]]

def _latlng(p: Point) -> Tuple[float, float]:
    if isinstance(p, Mapping):
        return float(p["lat"]), float(p["lng"])
    lat, lng = p
    return float(lat), float(lng)

def haversine_m(a: Point, b: Point) -> float:
    """Great-circle distance in metres between two (lat, lng) points."""
    lat1, lng1 = _latlng(a)
    lat2, lng2 = _latlng(b)
    dlat = radians(lat2 - lat1)
    dlng = radians(lng2 - lng1)
    h = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * asin(min(1.0, sqrt(h)))

def compute_length(points: Iterable[Point]) -> float:
    """Path length in km over consecutive points, rounded to 2 decimals.

    Fewer than two points is a zero-length path.
    """
    pts = list(points)
    if len(pts) < 2:
        return 0.0
    total_m = sum(haversine_m(pts[i], pts[i + 1]) for i in range(len(pts) - 1))
    return round(total_m / 1000.0, 2)
