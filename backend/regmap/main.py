import logging
import os
import random
import string
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from .directions import MalformedDirections
from .models import DirectionsRequest, SurveySummary
from .pathing import analyze
from .store import MapSurvey

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Redis
# ---------------------------------------------------------------------------

redis_client: aioredis.Redis | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global redis_client
    redis_url = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_client = aioredis.from_url(redis_url, decode_responses=True)
    yield
    await redis_client.aclose()


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(title="Regular Map Surveyor", lifespan=lifespan)

_cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _new_id(length: int = 6) -> str:
    return "".join(random.choices(string.ascii_uppercase + string.digits, k=length))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _reject(exc: ValueError) -> HTTPException:
    if isinstance(exc, MalformedDirections):
        logger.warning(
            "Rejected directions: %s (char %r at %d)", exc, exc.char, exc.position
        )
    return HTTPException(status_code=400, detail=str(exc))


async def _require_summary(survey: MapSurvey) -> SurveySummary:
    summary = await survey.get_summary()
    if summary is None:
        raise HTTPException(status_code=404, detail="Survey not found")
    return summary


# ---------------------------------------------------------------------------
# REST endpoints
# ---------------------------------------------------------------------------


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.post("/analyze")
async def analyze_directions(req: DirectionsRequest):
    try:
        result = await run_in_threadpool(analyze, req.directions)
    except ValueError as exc:
        raise _reject(exc)
    return result._asdict()


@app.post("/surveys", status_code=201)
async def create_survey(req: DirectionsRequest):
    survey = MapSurvey(_new_id(6), redis_client)
    try:
        summary = await survey.create(req.directions)
    except ValueError as exc:
        raise _reject(exc)
    return summary.model_dump()


@app.get("/surveys/{survey_id}")
async def get_survey(survey_id: str):
    survey = MapSurvey(survey_id, redis_client)
    summary = await _require_summary(survey)
    return summary.model_dump()


@app.get("/surveys/{survey_id}/map")
async def get_survey_map(survey_id: str):
    survey = MapSurvey(survey_id, redis_client)
    await _require_summary(survey)
    facility = await survey.load_map()
    if facility is None:
        raise HTTPException(status_code=404, detail="Survey not found")
    return {"survey_id": survey_id, "map": facility.render()}


@app.get("/surveys/{survey_id}/rooms/{x}/{y}")
async def get_room_distance(survey_id: str, x: int, y: int):
    survey = MapSurvey(survey_id, redis_client)
    await _require_summary(survey)
    try:
        doors = await survey.get_distance(x, y)
    except ValueError as exc:
        raise _reject(exc)
    if doors is None:
        raise HTTPException(status_code=404, detail="Survey not found")
    return {"survey_id": survey_id, "x": x, "y": y, "doors": doors}
