"""
Dhyaan (Meditation) Router: meditation and breathing session logs.
"""

from typing import Mapping

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import func
from sqlalchemy.orm import Session

from models.dhyaan import BreathingSession, MeditationSession
from models.schemas import (
    BREATHING_TECHNIQUES,
    INVALID_TECHNIQUE,
    INVALID_TYPE,
    MEDITATION_TYPES,
    BreathingSessionCreate,
    BreathingSessionOut,
    BreathingSessionUpdate,
    BreathingStats,
    MeditationSessionCreate,
    MeditationSessionOut,
    MeditationSessionUpdate,
)
from routers.resource_router import (
    Resource,
    build_router,
    choice_filter,
    flag_filter,
    timestamp_range,
)


class BreathingResource(Resource):
    """Breathing sessions, plus ``?stats=true`` totals for the caller."""

    def read(self, db: Session, user_id: str, params: Mapping[str, str]):
        if params.get("stats") == "true":
            return self.stats(db, user_id)
        return super().read(db, user_id, params)

    def stats(self, db: Session, user_id: str) -> dict:
        rows = (
            db.query(
                BreathingSession.technique,
                func.count(BreathingSession.id),
                func.coalesce(func.sum(BreathingSession.duration_seconds), 0),
            )
            .filter(BreathingSession.user_id == user_id)
            .group_by(BreathingSession.technique)
            .all()
        )
        by_technique = {technique: 0 for technique in BREATHING_TECHNIQUES}
        total_sessions = 0
        total_seconds = 0
        for technique, count, seconds in rows:
            total_sessions += count
            total_seconds += int(seconds)
            if technique in by_technique:
                by_technique[technique] = count
        logger.info(f"Breathing stats for {user_id}: {total_sessions} sessions")
        return BreathingStats(
            total_sessions=total_sessions,
            total_duration_seconds=total_seconds,
            sessions_by_technique=by_technique,
        ).model_dump(by_alias=True)


meditation_resource = Resource(
    path="/meditation-sessions",
    model=MeditationSession,
    create_schema=MeditationSessionCreate,
    update_schema=MeditationSessionUpdate,
    out_schema=MeditationSessionOut,
    label="Meditation session",
    delete_key="session",
    filters=[
        timestamp_range(MeditationSession.created_at),
        choice_filter("type", MeditationSession.type, MEDITATION_TYPES, *INVALID_TYPE),
        flag_filter("completed", MeditationSession.completed),
    ],
    tag="Dhyaan/Meditation",
)

breathing_resource = BreathingResource(
    path="/breathing-sessions",
    model=BreathingSession,
    create_schema=BreathingSessionCreate,
    update_schema=BreathingSessionUpdate,
    out_schema=BreathingSessionOut,
    label="Breathing session",
    delete_key="session",
    filters=[
        choice_filter("technique", BreathingSession.technique, BREATHING_TECHNIQUES, *INVALID_TECHNIQUE),
        timestamp_range(BreathingSession.created_at),
    ],
    tag="Dhyaan/Breathing",
)

meditation_router = build_router(meditation_resource)
breathing_router = build_router(breathing_resource)

# Static option lists for the session pickers
options_router = APIRouter(prefix="/api", tags=["Dhyaan/Meditation"])


@options_router.get("/meditation-options")
async def get_meditation_options():
    """
    Get the values accepted by the meditation and breathing endpoints.

    Returns:
        Meditation types and breathing techniques
    """
    return JSONResponse(
        content={
            "meditationTypes": list(MEDITATION_TYPES),
            "breathingTechniques": list(BREATHING_TECHNIQUES),
        }
    )
