"""
Dev helper to create test users, mint bearer session tokens, and seed demo
records for dashboard verification.

Usage:
  python -m scripts.dev_seed_demo
"""

from datetime import timedelta
from typing import Optional

from loguru import logger

from config.settings import settings
from models.db import SessionLocal, init_db
from models.dhyaan import MeditationSession
from models.planner import Goal
from models.user import User, UserSession
from utils.helpers import utcnow


DEMO_USERS = [
    ("user_1", "Alice Johnson", "alice@test.com", "session_1", "test_token_alice"),
    ("user_2", "Bob Smith", "bob@test.com", "session_2", "test_token_bob"),
    ("user_3", "Charlie Davis", "charlie@test.com", "session_3", "test_token_charlie"),
]

DEMO_GOALS = [
    ("Meditate daily for 30 days", "Build a consistent morning meditation habit", "active", 30),
    ("Sleep 8 hours each night", "Go to bed by 10:30pm on weeknights", "active", 60),
    ("Journal three times a week", None, "completed", None),
]

DEMO_MEDITATIONS = [
    (600, "guided", True, 1),
    (300, "breathing", True, 2),
    (900, "mindfulness", False, 4),
]


def upsert_user(db, user_id: str, email: str, name: Optional[str] = None) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        user = User(id=user_id, email=email, name=name or "Demo User", email_verified=True)
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def upsert_session(db, session_id: str, token: str, user_id: str) -> UserSession:
    expires_at = utcnow() + timedelta(days=settings.session_ttl_days)
    session = db.query(UserSession).filter(UserSession.token == token).first()
    if session:
        session.expires_at = expires_at
    else:
        session = UserSession(
            id=session_id,
            token=token,
            user_id=user_id,
            expires_at=expires_at,
            ip_address="127.0.0.1",
            user_agent="Dev Seed",
        )
        db.add(session)
    db.commit()
    return session


def seed_demo(db, user_id: str):
    now = utcnow()

    if not db.query(Goal).filter(Goal.user_id == user_id).first():
        for title, description, status, days_ahead in DEMO_GOALS:
            target = (now + timedelta(days=days_ahead)).date().isoformat() if days_ahead else None
            db.add(
                Goal(
                    user_id=user_id,
                    title=title,
                    description=description,
                    status=status,
                    target_date=target,
                    created_at=now,
                    updated_at=now,
                )
            )

    if not db.query(MeditationSession).filter(MeditationSession.user_id == user_id).first():
        for duration, kind, completed, days_ago in DEMO_MEDITATIONS:
            db.add(
                MeditationSession(
                    user_id=user_id,
                    duration=duration,
                    type=kind,
                    completed=completed,
                    created_at=now - timedelta(days=days_ago),
                )
            )

    db.commit()


def main():
    init_db()
    db = SessionLocal()
    try:
        print("=== DEV SEED COMPLETE ===")
        for user_id, name, email, session_id, token in DEMO_USERS:
            user = upsert_user(db, user_id, email=email, name=name)
            upsert_session(db, session_id, token, user.id)
            seed_demo(db, user.id)
            print(f"{user.id:<8} {user.email:<18} Authorization: Bearer {token}")
        logger.info(f"Seeded {len(DEMO_USERS)} demo users")
    finally:
        db.close()


if __name__ == "__main__":
    main()
