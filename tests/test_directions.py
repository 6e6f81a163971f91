# tests/test_directions.py
import pytest

from directions import (
    DIRECTION_TEXT,
    UNKNOWN_ROAD,
    Direction,
    NavigationDirection,
    classify_turn,
    relative_bearing,
    route_directions,
)


def test_default_direction_text():
    assert str(NavigationDirection()) == "Go straight on unknown road and continue for 0.000 miles."


@pytest.mark.parametrize("direction", list(Direction))
def test_string_round_trip_for_every_direction(direction):
    text = f"{DIRECTION_TEXT[direction]} on Hearst Ave and continue for 1.234 miles."
    parsed = NavigationDirection.from_string(text)
    assert parsed.direction is direction
    assert parsed.way == "Hearst Ave"
    assert parsed.distance == 1.234
    assert str(parsed) == text


def test_round_trip_keeps_awkward_way_names():
    text = "Turn left on St. Mary's Rd on the hill and continue for 0.050 miles."
    assert str(NavigationDirection.from_string(text)) == text


def test_formatting_rounds_to_three_places():
    nd = NavigationDirection(Direction.SHARP_RIGHT, "Shattuck Ave", 2.0)
    assert str(nd) == "Sharp right on Shattuck Ave and continue for 2.000 miles."


@pytest.mark.parametrize("text", [
    "",
    "Turn around on Oak St and continue for 1.000 miles.",
    "Turn left on Oak St and continue for many miles.",
    "Turn left on Oak St and continue for 1.000 miles",
])
def test_from_string_rejects_malformed_text(text):
    with pytest.raises(ValueError):
        NavigationDirection.from_string(text)


def test_direction_table_is_read_only():
    assert len(DIRECTION_TEXT) == 8
    with pytest.raises(TypeError):
        DIRECTION_TEXT[Direction.START] = "Begin"


@pytest.mark.parametrize("prev, cur, expected", [
    (0.0, 10.0, Direction.STRAIGHT),
    (0.0, -15.0, Direction.STRAIGHT),
    (0.0, 25.0, Direction.SLIGHT_RIGHT),
    (0.0, -25.0, Direction.SLIGHT_LEFT),
    (0.0, 90.0, Direction.RIGHT),
    (0.0, -90.0, Direction.LEFT),
    (0.0, 150.0, Direction.SHARP_RIGHT),
    (0.0, -150.0, Direction.SHARP_LEFT),
    (350.0, 15.0, Direction.SLIGHT_RIGHT),
    (-170.0, 170.0, Direction.SLIGHT_LEFT),
])
def test_classify_turn(prev, cur, expected):
    assert classify_turn(prev, cur) is expected


def test_relative_bearing_wraps():
    assert relative_bearing(350.0, 10.0) == pytest.approx(20.0)
    assert relative_bearing(10.0, 350.0) == pytest.approx(-20.0)


def test_route_directions_one_maneuver_per_road(streets):
    route = [1, 2, 3, 4, 5, 6]
    steps = route_directions(streets, route)

    assert [s.direction for s in steps] == [Direction.START, Direction.RIGHT, Direction.SHARP_RIGHT]
    assert [s.way for s in steps] == ["Oak St", "Elm St", UNKNOWN_ROAD]
    assert steps[0].distance == pytest.approx(streets.weight(1, 2) + streets.weight(2, 3))
    assert steps[1].distance == pytest.approx(streets.weight(3, 4) + streets.weight(4, 5))
    assert steps[2].distance == pytest.approx(streets.weight(5, 6))


def test_route_directions_text_parses_back(streets):
    for step in route_directions(streets, [1, 2, 3, 4]):
        text = str(step)
        assert str(NavigationDirection.from_string(text)) == text


def test_short_routes_have_no_directions(streets):
    assert route_directions(streets, []) == []
    assert route_directions(streets, [3]) == []
