# directions.py
"""
Turn a routed node path into human-readable maneuvers.

Each maneuver prints as
    "<direction> on <way> and continue for <miles, 3 decimals> miles."
and NavigationDirection.from_string reads that text back exactly.
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import List, Mapping, Sequence

from calcDist import bearing
from config import NAVIGATION_SETTINGS
from graph_db import GraphDB
from router import edge_cost_fn


class Direction(IntEnum):
    START = 0
    STRAIGHT = 1
    SLIGHT_LEFT = 2
    SLIGHT_RIGHT = 3
    RIGHT = 4
    LEFT = 5
    SHARP_LEFT = 6
    SHARP_RIGHT = 7


DIRECTION_TEXT: Mapping[Direction, str] = MappingProxyType({
    Direction.START: "Start",
    Direction.STRAIGHT: "Go straight",
    Direction.SLIGHT_LEFT: "Slight left",
    Direction.SLIGHT_RIGHT: "Slight right",
    Direction.RIGHT: "Turn right",
    Direction.LEFT: "Turn left",
    Direction.SHARP_LEFT: "Sharp left",
    Direction.SHARP_RIGHT: "Sharp right",
})

_TEXT_DIRECTION = {text: d for d, text in DIRECTION_TEXT.items()}

UNKNOWN_ROAD = "unknown road"

_PATTERN = re.compile(
    r"(?P<direction>" + "|".join(re.escape(t) for t in DIRECTION_TEXT.values()) + r")"
    r" on (?P<way>.*) and continue for (?P<distance>[0-9]+(?:\.[0-9]+)?) miles\."
)


@dataclass(frozen=True)
class NavigationDirection:
    direction: Direction = Direction.STRAIGHT
    way: str = UNKNOWN_ROAD
    distance: float = 0.0

    def __str__(self) -> str:
        return f"{DIRECTION_TEXT[self.direction]} on {self.way} and continue for {self.distance:.3f} miles."

    @classmethod
    def from_string(cls, text: str) -> "NavigationDirection":
        """Parse the printed form; raises ValueError when text does not match it."""
        m = _PATTERN.fullmatch(text)
        if m is None:
            raise ValueError(f"not a navigation direction: {text!r}")
        return cls(direction=_TEXT_DIRECTION[m.group('direction')],
                   way=m.group('way'),
                   distance=float(m.group('distance')))


def relative_bearing(prev_bearing: float, cur_bearing: float) -> float:
    """Signed change of heading in [-180, 180); positive turns right."""
    return (cur_bearing - prev_bearing + 180.0) % 360.0 - 180.0


def classify_turn(prev_bearing: float, cur_bearing: float) -> Direction:
    angle = relative_bearing(prev_bearing, cur_bearing)
    magnitude = abs(angle)
    right = angle > 0
    if magnitude <= NAVIGATION_SETTINGS['straight_max']:
        return Direction.STRAIGHT
    if magnitude <= NAVIGATION_SETTINGS['slight_max']:
        return Direction.SLIGHT_RIGHT if right else Direction.SLIGHT_LEFT
    if magnitude <= NAVIGATION_SETTINGS['turn_max']:
        return Direction.RIGHT if right else Direction.LEFT
    return Direction.SHARP_RIGHT if right else Direction.SHARP_LEFT


def route_directions(graph: GraphDB, route: Sequence[int]) -> List[NavigationDirection]:
    """
    Group a route into one maneuver per stretch of road.

    A new maneuver starts whenever the way name changes; its direction comes
    from the bearing change where the two roads meet.
    """
    if len(route) < 2:
        return []

    cost_of = edge_cost_fn(graph)
    way_of = getattr(graph, 'way_name', None)

    def _bearing(u, v):
        return bearing(graph.lon(u), graph.lat(u), graph.lon(v), graph.lat(v))

    directions = []
    direction, way, distance = Direction.START, None, 0.0
    prev_bearing = None
    for u, v in zip(route, route[1:]):
        name = (way_of(u, v) if way_of else None) or UNKNOWN_ROAD
        heading = _bearing(u, v)
        if way is None:
            way = name
        elif name != way:
            directions.append(NavigationDirection(direction, way, distance))
            direction, way, distance = classify_turn(prev_bearing, heading), name, 0.0
        distance += cost_of(u, v)
        prev_bearing = heading
    directions.append(NavigationDirection(direction, way, distance))
    return directions
