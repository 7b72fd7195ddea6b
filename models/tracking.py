from sqlalchemy import Boolean, Column, Date, Integer, String, DateTime, ForeignKey, Text

from utils.helpers import utcnow
from .db import Base


class MoodEntry(Base):
    __tablename__ = "mood_tracking"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    mood_value = Column(Integer, nullable=False)  # 1-10
    mood_label = Column(String, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)


class SleepEntry(Base):
    __tablename__ = "sleep_tracking"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    hours_slept = Column(Integer, nullable=False)
    quality = Column(Integer, nullable=False)  # 1-10
    sleep_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class StressEntry(Base):
    __tablename__ = "stress_tracking"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    stress_level = Column(Integer, nullable=False)  # 1-10
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)


class ActivityCompletion(Base):
    __tablename__ = "activity_completions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    activity_name = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completion_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
