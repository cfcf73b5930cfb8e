"""
Door distances - BFS over the room graph and the two survey answers.
"""

from collections import deque
from typing import NamedTuple

from .directions import build_map
from .facility import ORIGIN, Coord, FacilityMap, Terrain

FAR_ROOM_DOORS = 1000


class Survey(NamedTuple):
    max_doors: int
    far_rooms: int


def shortest_distances(facility: FacilityMap, start: Coord = ORIGIN) -> dict[Coord, int]:
    """
    BFS from `start` through doors. Every door costs 1, so the first visit to
    a room is its shortest distance.
    """
    if not facility.sealed:
        raise ValueError("Map walls have not been applied")
    if not facility.boundary.contains(start):
        raise ValueError(f"Start ({start.x},{start.y}) is outside the map")
    if facility.terrain_at(start) != Terrain.ROOM:
        raise ValueError(f"Start ({start.x},{start.y}) is not a room")

    visited: dict[Coord, int] = {start: 0}
    queue: deque[Coord] = deque([start])

    while queue:
        room = queue.popleft()
        dist = visited[room]
        for nb in facility.rooms_next_to(room):
            if nb in visited:
                continue
            visited[nb] = dist + 1
            queue.append(nb)

    return visited


def survey(distances: dict[Coord, int]) -> Survey:
    max_doors = 0
    far_rooms = 0
    for doors in distances.values():
        if doors > max_doors:
            max_doors = doors
        if doors >= FAR_ROOM_DOORS:
            far_rooms += 1
    return Survey(max_doors, far_rooms)


def analyze(directions: str) -> Survey:
    return survey(shortest_distances(build_map(directions)))
