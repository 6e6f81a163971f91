# calcDist.py
import math

from config import EARTH_RADIUS_MI


def _central_angle(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def haversine_mi(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Great-circle distance in miles between two lon/lat points."""
    return EARTH_RADIUS_MI * _central_angle(lon1, lat1, lon2, lat2)


def bearing(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """
    Initial bearing in degrees from point 1 towards point 2.

    0 is north, 90 is east; the result lies in (-180, 180].
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlambda = math.radians(lon2 - lon1)

    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    return math.degrees(math.atan2(y, x))

