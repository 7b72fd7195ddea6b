from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import func
from sqlalchemy.orm import Session

from models.db import get_db
from models.dhyaan import BreathingSession, MeditationSession
from models.journal import JournalEntry
from models.planner import Goal, Task
from models.schemas import TASK_STATUSES
from models.tracking import ActivityCompletion, MoodEntry, SleepEntry, StressEntry
from utils.auth import get_current_user_id
from utils.errors import internal_error
from utils.helpers import log_api_call, utcnow

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _day_start(d: date) -> datetime:
    return datetime.combine(d, time.min)


def _round(value: Optional[float]) -> Optional[float]:
    return round(float(value), 1) if value is not None else None


def _mood_trend(db: Session, user_id: str, today: date) -> List[Dict[str, Any]]:
    first_day = today - timedelta(days=29)
    rows = (
        db.query(MoodEntry.mood_value, MoodEntry.created_at)
        .filter(MoodEntry.user_id == user_id)
        .filter(MoodEntry.created_at >= _day_start(first_day))
        .all()
    )
    by_day: Dict[date, List[int]] = {}
    for value, created_at in rows:
        by_day.setdefault(created_at.date(), []).append(value)

    trend: List[Dict[str, Any]] = []
    for i in range(29, -1, -1):
        d = today - timedelta(days=i)
        values = by_day.get(d, [])
        trend.append(
            {
                "date": d.isoformat(),
                "mood": _round(sum(values) / len(values)) if values else None,
                "count": len(values),
            }
        )
    return trend


def _consistency_streak(db: Session, user_id: str, today: date) -> int:
    """Consecutive days, counting back from today, with any logged activity."""
    cutoff = _day_start(today - timedelta(days=60))
    activity_dates = set()
    for model in (MoodEntry, JournalEntry, MeditationSession, BreathingSession):
        rows = (
            db.query(model.created_at)
            .filter(model.user_id == user_id)
            .filter(model.created_at >= cutoff)
            .all()
        )
        activity_dates.update(created_at.date() for (created_at,) in rows)

    completions = (
        db.query(ActivityCompletion.completion_date)
        .filter(ActivityCompletion.user_id == user_id)
        .filter(ActivityCompletion.completed.is_(True))
        .filter(ActivityCompletion.completion_date >= cutoff.date())
        .all()
    )
    activity_dates.update(d for (d,) in completions)

    streak = 0
    cur = today
    while cur in activity_dates:
        streak += 1
        cur = cur - timedelta(days=1)
    return streak


@router.get("/stats")
async def get_dashboard_stats(
    user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)
) -> Dict[str, Any]:
    log_api_call("GET /api/dashboard/stats")
    try:
        today = utcnow().date()
        week_start = today - timedelta(days=6)

        sleep_hours, sleep_quality = (
            db.query(func.avg(SleepEntry.hours_slept), func.avg(SleepEntry.quality))
            .filter(SleepEntry.user_id == user_id)
            .filter(SleepEntry.sleep_date >= week_start)
            .one()
        )
        stress = (
            db.query(func.avg(StressEntry.stress_level))
            .filter(StressEntry.user_id == user_id)
            .filter(StressEntry.created_at >= _day_start(week_start))
            .scalar()
        )
        meditation_seconds = (
            db.query(func.coalesce(func.sum(MeditationSession.duration), 0))
            .filter(MeditationSession.user_id == user_id)
            .filter(MeditationSession.completed.is_(True))
            .filter(MeditationSession.created_at >= _day_start(week_start))
            .scalar()
        )

        task_counts = {status: 0 for status in TASK_STATUSES}
        for status, count in (
            db.query(Task.status, func.count(Task.id))
            .filter(Task.user_id == user_id)
            .group_by(Task.status)
            .all()
        ):
            task_counts[status] = count

        active_goals = (
            db.query(func.count(Goal.id))
            .filter(Goal.user_id == user_id)
            .filter(Goal.status == "active")
            .scalar()
        )

        return {
            "consistencyStreakDays": _consistency_streak(db, user_id, today),
            "moodTrend30d": _mood_trend(db, user_id, today),
            "averageSleepHours7d": _round(sleep_hours),
            "averageSleepQuality7d": _round(sleep_quality),
            "averageStress7d": _round(stress),
            "taskCounts": task_counts,
            "activeGoals": active_goals,
            "meditationMinutes7d": _round(int(meditation_seconds) / 60),
        }
    except Exception as e:
        logger.error(f"Failed to compute dashboard stats: {e}")
        raise internal_error(e)
