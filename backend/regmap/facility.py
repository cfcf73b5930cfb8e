"""
Facility Map - Sparse Grid, Wall Fill, and Room Adjacency

Rooms sit on even offsets from the origin, doors on the odd cell between two
rooms. Coordinates are (x, y) with y growing downward, so north is up.
Legend: .=room  -=door (room above)  |=door  #=wall  X=origin room
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Optional


class Coord(NamedTuple):
    x: int
    y: int

    def step(self, dx: int, dy: int, times: int = 1) -> "Coord":
        return Coord(self.x + dx * times, self.y + dy * times)


class Terrain(Enum):
    ROOM = "room"
    DOOR = "door"
    WALL = "wall"


ORIGIN = Coord(0, 0)

# Doors render as - or | depending on their neighbours, see door_char
SYMBOLS = {
    Terrain.ROOM: ".",
    Terrain.WALL: "#",
}

# (dx, dy) for one step; doors are one step away, rooms two
DIRECTIONS = {
    "N": (0, -1),
    "S": (0, 1),
    "E": (1, 0),
    "W": (-1, 0),
}


@dataclass(frozen=True)
class Boundary:
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def contains(self, coord: Coord) -> bool:
        return (
            self.min_x <= coord.x <= self.max_x and self.min_y <= coord.y <= self.max_y
        )

    def padded(self, amount: int = 1) -> "Boundary":
        return Boundary(
            self.min_x - amount,
            self.max_x + amount,
            self.min_y - amount,
            self.max_y + amount,
        )

    def rows(self) -> Iterator[list[Coord]]:
        for y in range(self.min_y, self.max_y + 1):
            yield [Coord(x, y) for x in range(self.min_x, self.max_x + 1)]


# ── Facility Map ────────────────────────────────────────────


class FacilityMap:
    def __init__(self, directions: str = ""):
        self.directions = directions
        self.topology: dict[Coord, Terrain] = {ORIGIN: Terrain.ROOM}
        self.boundary: Optional[Boundary] = None

    @property
    def sealed(self) -> bool:
        return self.boundary is not None

    def terrain_at(self, coord: Coord) -> Optional[Terrain]:
        return self.topology.get(coord)

    def count(self, terrain: Terrain) -> int:
        return sum(1 for t in self.topology.values() if t == terrain)

    def add_passage(self, current: Coord, direction: str) -> Coord:
        """Mark the door and room one move from `current`; return the room."""
        if self.sealed:
            raise ValueError("Map walls already applied; no more passages can be added")
        dx, dy = DIRECTIONS[direction]
        door = current.step(dx, dy)
        room = current.step(dx, dy, 2)

        # Several branches may cross the same door
        self.topology[door] = Terrain.DOOR
        self.topology[room] = Terrain.ROOM
        return room

    # ── Wall Fill ───────────────────────────────────────────

    def topology_boundary(self) -> Boundary:
        xs = [c.x for c in self.topology]
        ys = [c.y for c in self.topology]
        return Boundary(min(xs), max(xs), min(ys), max(ys))

    def apply_walls(self) -> Boundary:
        if self.boundary is not None:
            return self.boundary

        boundary = self.topology_boundary().padded(1)
        for row in boundary.rows():
            for coord in row:
                self.topology.setdefault(coord, Terrain.WALL)

        self.boundary = boundary
        return boundary

    # ── Graph Adapter ───────────────────────────────────────

    def rooms_next_to(self, coord: Coord) -> set[Coord]:
        rooms = set()
        for dx, dy in DIRECTIONS.values():
            if self.topology.get(coord.step(dx, dy)) == Terrain.DOOR:
                rooms.add(coord.step(dx, dy, 2))
        return rooms

    # ── Display ─────────────────────────────────────────────

    def door_char(self, coord: Coord) -> str:
        if self.topology.get(coord.step(0, -1)) == Terrain.ROOM:
            return "-"
        return "|"

    def render(self) -> str:
        if self.boundary is None:
            raise ValueError("Map walls have not been applied")

        lines = []
        for row in self.boundary.rows():
            chars = []
            for coord in row:
                terrain = self.topology[coord]
                if coord == ORIGIN:
                    chars.append("X")
                elif terrain == Terrain.DOOR:
                    chars.append(self.door_char(coord))
                else:
                    chars.append(SYMBOLS[terrain])
            lines.append("".join(chars))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"FacilityMap(rooms={self.count(Terrain.ROOM)}, "
            f"doors={self.count(Terrain.DOOR)}, boundary={self.boundary})"
        )

    @classmethod
    def from_rendering(cls, text: str) -> "FacilityMap":
        """Rebuild a walled map from `render()` output, anchored on the X."""
        lines = text.strip("\n").splitlines()
        origin = None
        for row, line in enumerate(lines):
            col = line.find("X")
            if col != -1:
                origin = (col, row)
                break
        if origin is None:
            raise ValueError("Rendering has no origin room 'X'")

        ox, oy = origin
        facility = cls()
        for row, line in enumerate(lines):
            for col, ch in enumerate(line):
                coord = Coord(col - ox, row - oy)
                if ch in ".X":
                    facility.topology[coord] = Terrain.ROOM
                elif ch in "-|":
                    facility.topology[coord] = Terrain.DOOR
                elif ch == "#":
                    facility.topology[coord] = Terrain.WALL
                else:
                    raise ValueError(f"Unexpected map character {ch!r} at ({col},{row})")

        facility.boundary = facility.topology_boundary()
        return facility
