import asyncio
import datetime as dt
import logging

from .directions import build_map
from .facility import Coord, FacilityMap, Terrain
from .models import SurveySummary
from .pathing import shortest_distances, survey

logger = logging.getLogger(__name__)

EXPIRY = 24 * 60 * 60  # 24 hours in seconds


class MapSurvey:
    """A submitted direction string and its survey results, kept in Redis.

    Only the directions and the summary are stored; the map is rebuilt from
    the directions whenever it is needed.
    """

    def __init__(self, survey_id: str, redis_client):
        self.survey_id = survey_id
        self.redis = redis_client
        self._summary_key = f"survey:{survey_id}"
        self._directions_key = f"survey:{survey_id}:directions"

    # ------------------------------------------------------------------
    # Internal Redis helpers
    # ------------------------------------------------------------------

    async def _save_summary(self, summary: SurveySummary):
        await self.redis.set(self._summary_key, summary.model_dump_json(), ex=EXPIRY)

    async def _load_summary(self) -> SurveySummary | None:
        raw = await self.redis.get(self._summary_key)
        if raw is None:
            return None
        return SurveySummary.model_validate_json(raw)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def create(self, directions: str) -> SurveySummary:
        """Build the map, measure it and record the results.

        Raises MalformedDirections (a ValueError) before anything is stored.
        """
        facility = await asyncio.to_thread(build_map, directions)
        distances = await asyncio.to_thread(shortest_distances, facility)
        result = survey(distances)

        summary = SurveySummary(
            survey_id=self.survey_id,
            max_doors=result.max_doors,
            far_rooms=result.far_rooms,
            rooms=facility.count(Terrain.ROOM),
            doors=facility.count(Terrain.DOOR),
            width=facility.boundary.width,
            height=facility.boundary.height,
            created_at=dt.datetime.now(dt.timezone.utc).isoformat(),
        )
        await self.redis.set(self._directions_key, directions, ex=EXPIRY)
        await self._save_summary(summary)

        logger.info(
            "Surveyed map %s: %d rooms, furthest %d doors, %d far rooms",
            self.survey_id,
            summary.rooms,
            summary.max_doors,
            summary.far_rooms,
        )
        return summary

    async def get_summary(self) -> SurveySummary | None:
        return await self._load_summary()

    async def get_directions(self) -> str | None:
        return await self.redis.get(self._directions_key)

    async def load_map(self) -> FacilityMap | None:
        directions = await self.get_directions()
        if directions is None:
            return None
        return await asyncio.to_thread(build_map, directions)

    async def get_distance(self, x: int, y: int) -> int | None:
        """Fewest doors from the origin to room (x, y), None if the survey is gone."""
        facility = await self.load_map()
        if facility is None:
            return None
        target = Coord(x, y)
        if not facility.boundary.contains(target):
            raise ValueError(f"({x},{y}) is outside the map")
        if facility.terrain_at(target) != Terrain.ROOM:
            raise ValueError(f"({x},{y}) is not a room")
        distances = await asyncio.to_thread(shortest_distances, facility)
        if target not in distances:
            raise ValueError(f"Room ({x},{y}) is not reachable from the origin")
        return distances[target]
