# fare_estimator/geo.py
import math
from typing import Tuple

EARTH_RADIUS_KM = 6371.0


def haversine(coord1: Tuple[float, float], coord2: Tuple[float, float]) -> float:
    """
    Great-circle distance between two (lat, lng) points in decimal degrees.

    Returns:
        Distance in kilometers.
    """
    lat1, lon1 = coord1
    lat2, lon2 = coord2

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2)**2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2)**2
    # float error can push a a hair past 1 for antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))
