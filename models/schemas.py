from datetime import date, datetime
from typing import Annotated, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from utils import validation as rules


MOOD_LABELS = ("anxious", "calm", "happy", "sad", "stressed", "peaceful", "energetic", "tired")
TASK_STATUSES = ("pending", "in_progress", "completed")
TASK_PRIORITIES = ("low", "medium", "high")
GOAL_STATUSES = ("active", "completed", "archived")
CHAT_ROLES = ("user", "assistant")
MEDITATION_TYPES = ("guided", "breathing", "mindfulness")
BREATHING_TECHNIQUES = ("box", "4-7-8", "calm")


class CreatePayload(BaseModel):
    """Every field is checked, absent ones as None."""

    model_config = ConfigDict(alias_generator=to_camel, validate_default=True, extra="ignore")


class UpdatePayload(BaseModel):
    """Only fields present in the body are checked."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class RecordOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: str


# ---------- Shared rules ----------
INVALID_TITLE = ("INVALID_TITLE", "Title must be a non-empty string")
INVALID_STATUS_TASK = (
    "INVALID_STATUS",
    "Invalid status. Must be one of: pending, in_progress, completed",
)
INVALID_PRIORITY = ("INVALID_PRIORITY", "Invalid priority. Must be one of: low, medium, high")
INVALID_DUE_DATE = ("INVALID_DUE_DATE", "Invalid dueDate format. Must be ISO8601 format")
INVALID_STATUS_GOAL = ("INVALID_STATUS", "Invalid status. Must be active, completed, or archived")
MISSING_TITLE = ("MISSING_TITLE", "Title is required and must be a non-empty string")
INVALID_DESCRIPTION = ("INVALID_DESCRIPTION", "description must be a string, number or boolean")
INVALID_TARGET_DATE = ("INVALID_TARGET_DATE", "targetDate must be a string, number or boolean")


# ---------- Journal ----------
class JournalEntryCreate(CreatePayload):
    title: Annotated[Optional[str], rules.text(MISSING_TITLE, missing=MISSING_TITLE)] = None
    content: Annotated[
        Optional[str],
        rules.text(
            ("MISSING_CONTENT", "Content is required and must be a non-empty string"),
            missing=("MISSING_CONTENT", "Content is required and must be a non-empty string"),
        ),
    ] = None


class JournalEntryUpdate(UpdatePayload):
    title: Annotated[Optional[str], rules.text(INVALID_TITLE, missing=INVALID_TITLE)] = None
    content: Annotated[
        Optional[str],
        rules.text(
            ("INVALID_CONTENT", "Content must be a non-empty string"),
            missing=("INVALID_CONTENT", "Content must be a non-empty string"),
        ),
    ] = None


class JournalEntryOut(RecordOut):
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


# ---------- Mood ----------
INVALID_MOOD_VALUE = ("INVALID_MOOD_VALUE", "moodValue must be an integer between 1 and 10")
INVALID_MOOD_LABEL = (
    "INVALID_MOOD_LABEL",
    f"Invalid mood label. Must be one of: {', '.join(MOOD_LABELS)}",
)
INVALID_NOTES = ("INVALID_NOTES", "notes must be a string")


class MoodEntryCreate(CreatePayload):
    mood_value: Annotated[
        Optional[int],
        rules.integer(
            INVALID_MOOD_VALUE,
            missing=("MISSING_MOOD_VALUE", "moodValue is required"),
            minimum=1,
            maximum=10,
            allow_strings=True,
        ),
    ] = None
    mood_label: Annotated[
        Optional[str],
        rules.choice(MOOD_LABELS, INVALID_MOOD_LABEL, missing=("MISSING_MOOD_LABEL", "moodLabel is required")),
    ] = None
    notes: Annotated[Optional[str], rules.text(INVALID_NOTES)] = None


class MoodEntryUpdate(UpdatePayload):
    mood_value: Annotated[
        Optional[int],
        rules.integer(INVALID_MOOD_VALUE, missing=INVALID_MOOD_VALUE, minimum=1, maximum=10, allow_strings=True),
    ] = None
    mood_label: Annotated[
        Optional[str], rules.choice(MOOD_LABELS, INVALID_MOOD_LABEL, missing=INVALID_MOOD_LABEL)
    ] = None
    notes: Annotated[Optional[str], rules.text(INVALID_NOTES)] = None


class MoodEntryOut(RecordOut):
    mood_value: int
    mood_label: str
    notes: Optional[str] = None
    created_at: datetime


# ---------- Tasks ----------
class TaskCreate(CreatePayload):
    title: Annotated[Optional[str], rules.text(MISSING_TITLE, missing=MISSING_TITLE)] = None
    description: Annotated[
        Optional[str], rules.text(INVALID_DESCRIPTION, coerce=True)
    ] = None
    status: Annotated[Optional[str], rules.choice(TASK_STATUSES, INVALID_STATUS_TASK, default="pending")] = None
    priority: Annotated[Optional[str], rules.choice(TASK_PRIORITIES, INVALID_PRIORITY, default="medium")] = None
    due_date: Annotated[Optional[str], rules.iso_datetime(INVALID_DUE_DATE)] = None


class TaskUpdate(UpdatePayload):
    title: Annotated[Optional[str], rules.text(INVALID_TITLE, missing=INVALID_TITLE)] = None
    description: Annotated[
        Optional[str], rules.text(INVALID_DESCRIPTION, coerce=True)
    ] = None
    status: Annotated[
        Optional[str], rules.choice(TASK_STATUSES, INVALID_STATUS_TASK, missing=INVALID_STATUS_TASK)
    ] = None
    priority: Annotated[
        Optional[str], rules.choice(TASK_PRIORITIES, INVALID_PRIORITY, missing=INVALID_PRIORITY)
    ] = None
    # null or "" clears the due date
    due_date: Annotated[Optional[str], rules.iso_datetime(INVALID_DUE_DATE)] = None


class TaskOut(RecordOut):
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ---------- Goals ----------
class GoalCreate(CreatePayload):
    title: Annotated[Optional[str], rules.text(MISSING_TITLE, missing=MISSING_TITLE)] = None
    description: Annotated[
        Optional[str], rules.text(INVALID_DESCRIPTION, coerce=True)
    ] = None
    status: Annotated[Optional[str], rules.choice(GOAL_STATUSES, INVALID_STATUS_GOAL, default="active")] = None
    target_date: Annotated[
        Optional[str], rules.text(INVALID_TARGET_DATE, coerce=True)
    ] = None


class GoalUpdate(UpdatePayload):
    title: Annotated[Optional[str], rules.text(INVALID_TITLE, missing=INVALID_TITLE)] = None
    description: Annotated[
        Optional[str], rules.text(INVALID_DESCRIPTION, coerce=True)
    ] = None
    status: Annotated[
        Optional[str], rules.choice(GOAL_STATUSES, INVALID_STATUS_GOAL, missing=INVALID_STATUS_GOAL)
    ] = None
    target_date: Annotated[
        Optional[str], rules.text(INVALID_TARGET_DATE, coerce=True)
    ] = None


class GoalOut(RecordOut):
    title: str
    description: Optional[str] = None
    status: str
    target_date: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ---------- Chat history ----------
MISSING_MESSAGE = ("MISSING_MESSAGE", "Message is required and must be a non-empty string")


class ChatMessageCreate(CreatePayload):
    message: Annotated[Optional[str], rules.text(MISSING_MESSAGE, missing=MISSING_MESSAGE)] = None
    role: Annotated[
        Optional[str],
        rules.choice(
            CHAT_ROLES,
            ("INVALID_ROLE", 'Role must be either "user" or "assistant"'),
            missing=("MISSING_ROLE", "Role is required"),
        ),
    ] = None


class ChatMessageUpdate(CreatePayload):
    # The message text is the only editable field and must be supplied
    message: Annotated[Optional[str], rules.text(MISSING_MESSAGE, missing=MISSING_MESSAGE)] = None


class CompanionMessage(CreatePayload):
    message: Annotated[Optional[str], rules.text(MISSING_MESSAGE, missing=MISSING_MESSAGE)] = None


class ChatMessageOut(RecordOut):
    message: str
    role: str
    created_at: datetime


# ---------- Meditation ----------
INVALID_DURATION = ("INVALID_DURATION", "Duration is required and must be a positive integer")
INVALID_TYPE = ("INVALID_TYPE", "Type must be one of: guided, breathing, mindfulness")
INVALID_COMPLETED = ("INVALID_COMPLETED", "Completed is required and must be a boolean")


class MeditationSessionCreate(CreatePayload):
    duration: Annotated[Optional[int], rules.integer(INVALID_DURATION, missing=INVALID_DURATION, minimum=1)] = None
    type: Annotated[
        Optional[str],
        rules.choice(MEDITATION_TYPES, INVALID_TYPE, missing=("MISSING_TYPE", "Type is required")),
    ] = None
    completed: Annotated[Optional[bool], rules.boolean(INVALID_COMPLETED, missing=INVALID_COMPLETED)] = None


class MeditationSessionUpdate(UpdatePayload):
    duration: Annotated[Optional[int], rules.integer(INVALID_DURATION, missing=INVALID_DURATION, minimum=1)] = None
    type: Annotated[Optional[str], rules.choice(MEDITATION_TYPES, INVALID_TYPE, missing=INVALID_TYPE)] = None
    completed: Annotated[Optional[bool], rules.boolean(INVALID_COMPLETED, missing=INVALID_COMPLETED)] = None


class MeditationSessionOut(RecordOut):
    duration: int
    type: str
    completed: bool
    created_at: datetime


# ---------- Breathing ----------
INVALID_BREATHING_DURATION = ("INVALID_DURATION", "durationSeconds must be a positive integer")
INVALID_TECHNIQUE = ("INVALID_TECHNIQUE", "technique must be one of: box, 4-7-8, calm")


class BreathingSessionCreate(CreatePayload):
    duration_seconds: Annotated[
        Optional[int],
        rules.integer(
            INVALID_BREATHING_DURATION,
            missing=("MISSING_REQUIRED_FIELD", "durationSeconds is required"),
            minimum=1,
        ),
    ] = None
    technique: Annotated[
        Optional[str],
        rules.choice(
            BREATHING_TECHNIQUES,
            INVALID_TECHNIQUE,
            missing=("MISSING_REQUIRED_FIELD", "technique is required"),
        ),
    ] = None


class BreathingSessionUpdate(UpdatePayload):
    duration_seconds: Annotated[
        Optional[int],
        rules.integer(INVALID_BREATHING_DURATION, missing=INVALID_BREATHING_DURATION, minimum=1),
    ] = None
    technique: Annotated[
        Optional[str], rules.choice(BREATHING_TECHNIQUES, INVALID_TECHNIQUE, missing=INVALID_TECHNIQUE)
    ] = None


class BreathingSessionOut(RecordOut):
    duration_seconds: int
    technique: str
    created_at: datetime


class BreathingStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_sessions: int
    total_duration_seconds: int
    sessions_by_technique: Dict[str, int] = Field(default_factory=dict)


# ---------- Sleep ----------
INVALID_HOURS_SLEPT = ("INVALID_HOURS_SLEPT", "hoursSlept must be a positive integer")
INVALID_QUALITY = ("INVALID_QUALITY", "quality must be an integer between 1 and 10")
INVALID_SLEEP_DATE = ("INVALID_DATE_FORMAT", "sleepDate must be in YYYY-MM-DD format")


class SleepEntryCreate(CreatePayload):
    hours_slept: Annotated[
        Optional[int],
        rules.integer(INVALID_HOURS_SLEPT, missing=("MISSING_HOURS_SLEPT", "hoursSlept is required"), minimum=1),
    ] = None
    quality: Annotated[
        Optional[int],
        rules.integer(INVALID_QUALITY, missing=("MISSING_QUALITY", "quality is required"), minimum=1, maximum=10),
    ] = None
    sleep_date: Annotated[
        Optional[date],
        rules.calendar_date(INVALID_SLEEP_DATE, missing=("MISSING_SLEEP_DATE", "sleepDate is required")),
    ] = None
    notes: Annotated[Optional[str], rules.text(INVALID_NOTES)] = None


class SleepEntryUpdate(UpdatePayload):
    hours_slept: Annotated[
        Optional[int], rules.integer(INVALID_HOURS_SLEPT, missing=INVALID_HOURS_SLEPT, minimum=1)
    ] = None
    quality: Annotated[
        Optional[int], rules.integer(INVALID_QUALITY, missing=INVALID_QUALITY, minimum=1, maximum=10)
    ] = None
    sleep_date: Annotated[
        Optional[date], rules.calendar_date(INVALID_SLEEP_DATE, missing=INVALID_SLEEP_DATE)
    ] = None
    notes: Annotated[Optional[str], rules.text(INVALID_NOTES)] = None


class SleepEntryOut(RecordOut):
    hours_slept: int
    quality: int
    sleep_date: date
    notes: Optional[str] = None
    created_at: datetime


# ---------- Stress ----------
INVALID_STRESS_LEVEL = ("INVALID_STRESS_LEVEL", "Stress level must be an integer between 1 and 10")


class StressEntryCreate(CreatePayload):
    stress_level: Annotated[
        Optional[int],
        rules.integer(
            INVALID_STRESS_LEVEL,
            missing=("MISSING_REQUIRED_FIELD", "Stress level is required"),
            minimum=1,
            maximum=10,
            allow_strings=True,
        ),
    ] = None
    notes: Annotated[Optional[str], rules.text(INVALID_NOTES)] = None


class StressEntryUpdate(UpdatePayload):
    stress_level: Annotated[
        Optional[int],
        rules.integer(INVALID_STRESS_LEVEL, missing=INVALID_STRESS_LEVEL, minimum=1, maximum=10, allow_strings=True),
    ] = None
    notes: Annotated[Optional[str], rules.text(INVALID_NOTES)] = None


class StressEntryOut(RecordOut):
    stress_level: int
    notes: Optional[str] = None
    created_at: datetime


# ---------- Activity completions ----------
INVALID_ACTIVITY_COMPLETED = ("INVALID_COMPLETED", "completed must be a boolean")
INVALID_COMPLETION_DATE = ("INVALID_DATE_FORMAT", "completionDate must be in YYYY-MM-DD format")
INVALID_COMPLETION_DAY = ("INVALID_DATE", "completionDate must be a valid date")
EMPTY_ACTIVITY_NAME = ("EMPTY_ACTIVITY_NAME", "activityName cannot be empty")


class ActivityCompletionCreate(CreatePayload):
    activity_name: Annotated[
        Optional[str],
        rules.text(
            ("INVALID_ACTIVITY_NAME", "activityName must be a string"),
            missing=("MISSING_ACTIVITY_NAME", "activityName is required"),
            empty=EMPTY_ACTIVITY_NAME,
        ),
    ] = None
    completed: Annotated[
        Optional[bool], rules.boolean(INVALID_ACTIVITY_COMPLETED, missing=INVALID_ACTIVITY_COMPLETED)
    ] = None
    completion_date: Annotated[
        Optional[date],
        rules.calendar_date(
            INVALID_COMPLETION_DATE,
            missing=("MISSING_COMPLETION_DATE", "completionDate is required"),
            invalid_date=INVALID_COMPLETION_DAY,
        ),
    ] = None


class ActivityCompletionUpdate(UpdatePayload):
    activity_name: Annotated[
        Optional[str],
        rules.text(EMPTY_ACTIVITY_NAME, missing=EMPTY_ACTIVITY_NAME, empty=EMPTY_ACTIVITY_NAME),
    ] = None
    completed: Annotated[
        Optional[bool], rules.boolean(INVALID_ACTIVITY_COMPLETED, missing=INVALID_ACTIVITY_COMPLETED)
    ] = None
    completion_date: Annotated[
        Optional[date],
        rules.calendar_date(
            INVALID_COMPLETION_DATE, missing=INVALID_COMPLETION_DATE, invalid_date=INVALID_COMPLETION_DAY
        ),
    ] = None


class ActivityCompletionOut(RecordOut):
    activity_name: str
    completed: bool
    completion_date: date
    created_at: datetime
