# query.py
import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from config import QUERY_SETTINGS, expand_bounds
from errors import InvalidQueryError

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
_LATLON = re.compile(rf"^\s*({_NUMBER})\s*[, ]\s*({_NUMBER})\s*$")


def parse_latlon(text: str) -> Optional[Tuple[float, float]]:
    """Parse 'lat,lon' string. Returns (lat, lon) or None."""
    if not text:
        return None
    m = _LATLON.match(text)
    if not m:
        return None
    return float(m.group(1)), float(m.group(2))


def validate_coordinate(lon: float, lat: float, label: str = "coordinate") -> None:
    """Raise InvalidQueryError unless lon/lat is a finite WGS84 position."""
    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise InvalidQueryError(f"{label} is not finite: lon={lon}, lat={lat}")
    if not -180.0 <= lon <= 180.0:
        raise InvalidQueryError(f"{label} longitude out of range: {lon}")
    if not -90.0 <= lat <= 90.0:
        raise InvalidQueryError(f"{label} latitude out of range: {lat}")


def is_in_area(lon: float, lat: float, bounds: Tuple[float, float, float, float],
               margin: float = 0.0) -> bool:
    """
    Check if coordinates are within a (west, south, east, north) box.

    Args:
        lon: Longitude
        lat: Latitude
        bounds: Box to test against
        margin: Extra degrees allowed on every side

    Returns:
        True if coordinates are inside the grown box
    """
    box = expand_bounds(bounds, margin)
    return (box['south'] <= lat <= box['north'] and
            box['west'] <= lon <= box['east'])


@dataclass(frozen=True)
class RouteQuery:
    start_lon: float
    start_lat: float
    dest_lon: float
    dest_lat: float

    @classmethod
    def from_strings(cls, start: str, goal: str) -> "RouteQuery":
        """Build a query from two 'lat,lon' strings."""
        parsed = []
        for label, text in (("start", start), ("goal", goal)):
            coord = parse_latlon(text)
            if coord is None:
                raise InvalidQueryError(f"{label} is not a 'lat,lon' pair: {text!r}")
            parsed.append(coord)
        (slat, slon), (dlat, dlon) = parsed
        return cls(start_lon=slon, start_lat=slat, dest_lon=dlon, dest_lat=dlat)

    def validate(self,
                 bounds: Optional[Tuple[float, float, float, float]] = None,
                 margin: Optional[float] = None) -> "RouteQuery":
        """
        Fail fast on coordinates the router cannot answer meaningfully.

        When bounds is given both endpoints must also fall inside the graph
        coverage grown by margin degrees.
        """
        validate_coordinate(self.start_lon, self.start_lat, "start")
        validate_coordinate(self.dest_lon, self.dest_lat, "goal")
        if bounds is not None:
            if margin is None:
                margin = QUERY_SETTINGS['coverage_margin_deg']
            for label, lon, lat in (("start", self.start_lon, self.start_lat),
                                    ("goal", self.dest_lon, self.dest_lat)):
                if not is_in_area(lon, lat, bounds, margin):
                    raise InvalidQueryError(
                        f"{label} ({lat:.6f}, {lon:.6f}) is outside graph coverage")
        return self
