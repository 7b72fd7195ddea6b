from datetime import timedelta

from conftest import ALICE, BOB
from models.dhyaan import MeditationSession
from models.tracking import MoodEntry
from utils.helpers import utcnow


def test_empty_dashboard(client):
    response = client.get("/api/dashboard/stats", headers=ALICE)
    assert response.status_code == 200

    stats = response.json()
    assert stats["consistencyStreakDays"] == 0
    assert len(stats["moodTrend30d"]) == 30
    assert stats["moodTrend30d"][-1] == {"date": utcnow().date().isoformat(), "mood": None, "count": 0}
    assert stats["averageSleepHours7d"] is None
    assert stats["averageSleepQuality7d"] is None
    assert stats["averageStress7d"] is None
    assert stats["taskCounts"] == {"pending": 0, "in_progress": 0, "completed": 0}
    assert stats["activeGoals"] == 0
    assert stats["meditationMinutes7d"] == 0


def test_dashboard_summarises_own_records(client, db_session):
    now = utcnow()
    today = now.date().isoformat()
    db_session.add_all(
        [
            MoodEntry(user_id="user_1", mood_value=6, mood_label="calm", created_at=now),
            MoodEntry(user_id="user_1", mood_value=8, mood_label="happy", created_at=now),
            MoodEntry(user_id="user_1", mood_value=4, mood_label="tired", created_at=now - timedelta(days=1)),
            MeditationSession(user_id="user_1", duration=600, type="guided", completed=True, created_at=now),
            MeditationSession(user_id="user_1", duration=300, type="guided", completed=False, created_at=now),
        ]
    )
    db_session.commit()

    for path, payload in (
        ("/api/sleep-tracking", {"hoursSlept": 7, "quality": 6, "sleepDate": today}),
        ("/api/sleep-tracking", {"hoursSlept": 8, "quality": 9, "sleepDate": today}),
        ("/api/stress-tracking", {"stressLevel": 3}),
        ("/api/tasks", {"title": "a", "status": "completed"}),
        ("/api/tasks", {"title": "b"}),
        ("/api/goals", {"title": "c"}),
        ("/api/goals", {"title": "d", "status": "archived"}),
    ):
        assert client.post(path, json=payload, headers=ALICE).status_code == 201
    client.post("/api/stress-tracking", json={"stressLevel": 9}, headers=BOB)

    stats = client.get("/api/dashboard/stats", headers=ALICE).json()
    assert stats["consistencyStreakDays"] == 2
    assert stats["moodTrend30d"][-1] == {"date": today, "mood": 7.0, "count": 2}
    assert stats["moodTrend30d"][-2]["mood"] == 4.0
    assert stats["averageSleepHours7d"] == 7.5
    assert stats["averageSleepQuality7d"] == 7.5
    assert stats["averageStress7d"] == 3.0
    assert stats["taskCounts"] == {"pending": 1, "in_progress": 0, "completed": 1}
    assert stats["activeGoals"] == 1
    assert stats["meditationMinutes7d"] == 10.0

    assert client.get("/api/dashboard/stats", headers=BOB).json()["averageStress7d"] == 9.0


def test_dashboard_requires_auth(client):
    assert client.get("/api/dashboard/stats").status_code == 401
