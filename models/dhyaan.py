from sqlalchemy import Boolean, Column, Integer, String, DateTime, ForeignKey

from utils.helpers import utcnow
from .db import Base


class MeditationSession(Base):
    __tablename__ = "meditation_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # seconds
    type = Column(String, nullable=False)  # guided, breathing, mindfulness
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)


class BreathingSession(Base):
    __tablename__ = "breathing_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    duration_seconds = Column(Integer, nullable=False)
    technique = Column(String, nullable=False)  # box, 4-7-8, calm
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
