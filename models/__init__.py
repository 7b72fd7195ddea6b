"""SQLAlchemy models package.

Import side-effect: importing this package will register all model classes
with SQLAlchemy's Base metadata so that Base.metadata.create_all creates tables.
"""

from .user import User, UserSession  # noqa: F401
from .journal import JournalEntry, ChatMessage  # noqa: F401
from .planner import Task, Goal  # noqa: F401
from .dhyaan import MeditationSession, BreathingSession  # noqa: F401
from .tracking import MoodEntry, SleepEntry, StressEntry, ActivityCompletion  # noqa: F401
