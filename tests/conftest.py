import os

# Must be set before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from main import app
from models.db import Base, SessionLocal, engine
from models.user import User, UserSession
from utils.helpers import utcnow


ALICE = {"Authorization": "Bearer test_token_alice"}
BOB = {"Authorization": "Bearer test_token_bob"}
EXPIRED = {"Authorization": "Bearer test_token_expired"}

# One valid create payload per resource
RESOURCES = {
    "/api/journal-entries": {"title": "Morning pages", "content": "Slept well, feeling rested."},
    "/api/mood-tracking": {"moodValue": 7, "moodLabel": "calm", "notes": "Walk helped"},
    "/api/tasks": {"title": "Meditate", "status": "pending", "priority": "high"},
    "/api/goals": {"title": "Run a 5k", "description": "Couch to 5k plan"},
    "/api/chat-history": {"message": "Hello there", "role": "user"},
    "/api/meditation-sessions": {"duration": 600, "type": "guided", "completed": True},
    "/api/breathing-sessions": {"durationSeconds": 120, "technique": "box"},
    "/api/sleep-tracking": {"hoursSlept": 8, "quality": 7, "sleepDate": "2024-02-29"},
    "/api/stress-tracking": {"stressLevel": 4, "notes": "Deadline week"},
    "/api/activity-completions": {
        "activityName": "Yoga",
        "completed": True,
        "completionDate": "2024-03-01",
    },
}


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    now = utcnow()
    session = SessionLocal()
    try:
        session.add_all(
            [
                User(id="user_1", name="Alice Johnson", email="alice@test.com"),
                User(id="user_2", name="Bob Smith", email="bob@test.com"),
            ]
        )
        session.flush()
        session.add_all(
            [
                UserSession(
                    id="session_1",
                    token="test_token_alice",
                    user_id="user_1",
                    expires_at=now + timedelta(days=30),
                ),
                UserSession(
                    id="session_2",
                    token="test_token_bob",
                    user_id="user_2",
                    expires_at=now + timedelta(days=30),
                ),
                UserSession(
                    id="session_3",
                    token="test_token_expired",
                    user_id="user_1",
                    expires_at=now - timedelta(minutes=5),
                ),
            ]
        )
        session.commit()
    finally:
        session.close()
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
