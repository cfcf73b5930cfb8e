"""Tests for directions.py: tracing branching routes and rejecting bad input."""

import pytest

from regmap.directions import MalformedDirections, build_map, trace_directions
from regmap.facility import ORIGIN, Coord, FacilityMap, Terrain


def _rooms(facility: FacilityMap) -> set[Coord]:
    return {c for c, t in facility.topology.items() if t == Terrain.ROOM}


# ---------------------------------------------------------------------------
# Tracing
# ---------------------------------------------------------------------------


def test_straight_route_moves_two_cells_per_letter():
    facility = FacilityMap()
    end = trace_directions(facility, "NESW")
    assert end == ORIGIN
    assert _rooms(facility) == {ORIGIN, Coord(0, -2), Coord(2, -2), Coord(2, 0)}


def test_anchors_are_optional():
    assert _rooms(build_map("^WNE$")) == _rooms(build_map("WNE"))


@pytest.mark.parametrize("suffix", ["\n", "\r\n", " \n"])
def test_trailing_newline_is_ignored(suffix):
    assert build_map("^WNE$" + suffix).render() == build_map("^WNE$").render()


def test_alternatives_start_from_the_fork_point():
    facility = build_map("^N(E|W)$")
    assert _rooms(facility) == {ORIGIN, Coord(0, -2), Coord(2, -2), Coord(-2, -2)}


def test_route_resumes_from_fork_point_after_group():
    facility = FacilityMap()
    end = trace_directions(facility, "^N(EE|W)N$")
    assert end == Coord(0, -4)
    assert facility.terrain_at(Coord(0, -3)) == Terrain.DOOR


def test_empty_option_adds_nothing():
    with_detour = build_map("^N(|)E$")
    plain = build_map("^NE$")
    assert with_detour.topology == plain.topology


def test_nested_groups_unwind_to_their_own_fork():
    facility = FacilityMap()
    end = trace_directions(facility, "E(N(W|E)S|SS)W")
    assert end == ORIGIN
    assert facility.terrain_at(Coord(2, -2)) == Terrain.ROOM
    assert facility.terrain_at(Coord(2, 4)) == Terrain.ROOM


def test_build_map_applies_walls():
    facility = build_map("^ENWWW(NEEE|SSE(EE|N))$")
    assert facility.sealed
    assert facility.directions == "^ENWWW(NEEE|SSE(EE|N))$"


@pytest.mark.parametrize("directions", ["", "^$", "\n", "^()$", "^(|)$"])
def test_empty_routes_give_origin_only(directions):
    facility = build_map(directions)
    assert _rooms(facility) == {ORIGIN}
    assert facility.render() == "###\n#X#\n###"


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


def test_unmatched_close_group():
    with pytest.raises(MalformedDirections) as exc_info:
        build_map("^N)$")
    assert exc_info.value.position == 2
    assert exc_info.value.char == ")"


def test_alternative_outside_group():
    with pytest.raises(MalformedDirections) as exc_info:
        build_map("^N|S$")
    assert exc_info.value.position == 2
    assert exc_info.value.char == "|"


def test_unclosed_group_reports_innermost_open():
    with pytest.raises(MalformedDirections) as exc_info:
        build_map("^N(E|(W$")
    assert exc_info.value.position == 5
    assert "Unclosed" in str(exc_info.value)


@pytest.mark.parametrize(
    "directions,position",
    [("^NX$", 2), ("^n$", 1), ("^N,E$", 2), ("^N E$", 2), ("^NE\tS$", 3), ("^N\nE$", 2)],
)
def test_unknown_character(directions, position):
    with pytest.raises(MalformedDirections) as exc_info:
        build_map(directions)
    assert exc_info.value.position == position
    assert exc_info.value.char == directions[position]


def test_malformed_directions_is_a_value_error():
    with pytest.raises(ValueError, match="position 3"):
        build_map("^EE)")
