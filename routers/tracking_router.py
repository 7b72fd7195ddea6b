"""
Self-tracking resources: mood, sleep, stress and activity completions.
"""

from models.schemas import (
    MOOD_LABELS,
    ActivityCompletionCreate,
    ActivityCompletionOut,
    ActivityCompletionUpdate,
    INVALID_MOOD_LABEL,
    MoodEntryCreate,
    MoodEntryOut,
    MoodEntryUpdate,
    SleepEntryCreate,
    SleepEntryOut,
    SleepEntryUpdate,
    StressEntryCreate,
    StressEntryOut,
    StressEntryUpdate,
)
from models.tracking import ActivityCompletion, MoodEntry, SleepEntry, StressEntry
from routers.resource_router import (
    Resource,
    build_router,
    choice_filter,
    date_range,
    flag_filter,
    timestamp_range,
)


mood_resource = Resource(
    path="/mood-tracking",
    model=MoodEntry,
    create_schema=MoodEntryCreate,
    update_schema=MoodEntryUpdate,
    out_schema=MoodEntryOut,
    label="Mood entry",
    filters=[
        choice_filter("moodLabel", MoodEntry.mood_label, MOOD_LABELS, *INVALID_MOOD_LABEL),
        timestamp_range(MoodEntry.created_at),
    ],
    tag="mood",
)

sleep_resource = Resource(
    path="/sleep-tracking",
    model=SleepEntry,
    create_schema=SleepEntryCreate,
    update_schema=SleepEntryUpdate,
    out_schema=SleepEntryOut,
    label="Sleep tracking entry",
    not_found_message="Record not found",
    order_by=[SleepEntry.sleep_date.desc(), SleepEntry.id.desc()],
    filters=[date_range(SleepEntry.sleep_date)],
    tag="sleep",
)

stress_resource = Resource(
    path="/stress-tracking",
    model=StressEntry,
    create_schema=StressEntryCreate,
    update_schema=StressEntryUpdate,
    out_schema=StressEntryOut,
    label="Stress tracking entry",
    not_found_message="Record not found",
    filters=[timestamp_range(StressEntry.created_at)],
    tag="stress",
)

activity_resource = Resource(
    path="/activity-completions",
    model=ActivityCompletion,
    create_schema=ActivityCompletionCreate,
    update_schema=ActivityCompletionUpdate,
    out_schema=ActivityCompletionOut,
    label="Activity completion",
    not_found_message="Record not found",
    delete_key="activity",
    order_by=[ActivityCompletion.completion_date.desc(), ActivityCompletion.id.desc()],
    filters=[
        flag_filter("completed", ActivityCompletion.completed),
        date_range(ActivityCompletion.completion_date),
    ],
    tag="activities",
)

mood_router = build_router(mood_resource)
sleep_router = build_router(sleep_resource)
stress_router = build_router(stress_resource)
activity_router = build_router(activity_resource)
