"""
Direction strings - trace a branching route regex into a FacilityMap.

    ^ENWWW(NEEE|SSE(EE|N))$

Letters move the cursor through a door into the next room. A group pushes the
fork point, `|` restarts from it, `)` returns to it. `^` and `$`
are ignored, as is trailing whitespace. Anything else is rejected.
"""

import logging

from .facility import DIRECTIONS, ORIGIN, Coord, FacilityMap, Terrain

logger = logging.getLogger(__name__)

IGNORED = set("^$")


class MalformedDirections(ValueError):
    def __init__(self, message: str, position: int, char: str = ""):
        super().__init__(f"{message} at position {position}")
        self.position = position
        self.char = char


def trace_directions(facility: FacilityMap, directions: str) -> Coord:
    """Walk `directions` into `facility`, returning the final cursor."""
    current = ORIGIN
    # fork points, with the index of the "(" that opened each
    branches: list[tuple[Coord, int]] = []

    # trailing newline from the input file is the only whitespace allowed
    for pos, ch in enumerate(directions.rstrip()):
        if ch in DIRECTIONS:
            current = facility.add_passage(current, ch)
        elif ch == "(":
            branches.append((current, pos))
        elif ch == ")":
            if not branches:
                raise MalformedDirections("Unmatched ')'", pos, ch)
            current, _ = branches.pop()
        elif ch == "|":
            if not branches:
                raise MalformedDirections("'|' outside of a group", pos, ch)
            current = branches[-1][0]
        elif ch in IGNORED:
            continue
        else:
            raise MalformedDirections(f"Unexpected character {ch!r}", pos, ch)

    if branches:
        _, opened_at = branches[-1]
        raise MalformedDirections("Unclosed '('", opened_at, "(")

    return current


def build_map(directions: str) -> FacilityMap:
    facility = FacilityMap(directions)
    trace_directions(facility, directions)
    facility.apply_walls()

    logger.debug(
        "Built map from %d chars: %d rooms, %d doors, %dx%d",
        len(directions),
        facility.count(Terrain.ROOM),
        facility.count(Terrain.DOOR),
        facility.boundary.width,
        facility.boundary.height,
    )
    return facility
