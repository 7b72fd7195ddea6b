from datetime import date

import pytest

from models.schemas import (
    ActivityCompletionCreate,
    ActivityCompletionUpdate,
    BreathingSessionCreate,
    ChatMessageCreate,
    GoalCreate,
    JournalEntryCreate,
    JournalEntryUpdate,
    MeditationSessionCreate,
    MoodEntryCreate,
    SleepEntryCreate,
    StressEntryCreate,
    TaskCreate,
    TaskUpdate,
)
from utils.errors import ApiError
from utils.validation import parse_payload


def error_code(schema, body, partial=False):
    with pytest.raises(ApiError) as exc:
        parse_payload(schema, body, partial=partial)
    assert exc.value.status_code == 400
    return exc.value.code


@pytest.mark.parametrize("owner_key", ["userId", "user_id"])
def test_owner_fields_are_rejected(owner_key):
    body = {"title": "Plan", "content": "Write it down", owner_key: "user_2"}
    assert error_code(JournalEntryCreate, body) == "USER_ID_NOT_ALLOWED"
    assert error_code(JournalEntryUpdate, {owner_key: "user_2"}, partial=True) == "USER_ID_NOT_ALLOWED"


def test_body_must_be_an_object():
    assert error_code(JournalEntryCreate, ["title"]) == "INVALID_BODY"


def test_strings_are_trimmed():
    values = parse_payload(JournalEntryCreate, {"title": "  Evening  ", "content": "\tCalm day \n"})
    assert values == {"title": "Evening", "content": "Calm day"}


@pytest.mark.parametrize("title", [None, "", "   ", 42])
def test_required_text_must_be_non_empty(title):
    assert error_code(JournalEntryCreate, {"title": title, "content": "x"}) == "MISSING_TITLE"


def test_required_text_on_update_uses_invalid_code():
    assert error_code(JournalEntryUpdate, {"title": "   "}, partial=True) == "INVALID_TITLE"


def test_first_violation_wins():
    # Both title and status are wrong, title is declared first
    assert error_code(TaskCreate, {"status": "someday"}) == "MISSING_TITLE"


@pytest.mark.parametrize("value", [0, 11, -3, "abc", 5.5, True])
def test_mood_value_out_of_range(value):
    assert error_code(MoodEntryCreate, {"moodValue": value, "moodLabel": "calm"}) == "INVALID_MOOD_VALUE"


@pytest.mark.parametrize("value", [1, 10, "7", 4.0])
def test_mood_value_bounds_are_inclusive(value):
    values = parse_payload(MoodEntryCreate, {"moodValue": value, "moodLabel": "calm"})
    assert 1 <= values["mood_value"] <= 10


def test_mood_requires_value_and_known_label():
    assert error_code(MoodEntryCreate, {"moodLabel": "calm"}) == "MISSING_MOOD_VALUE"
    assert error_code(MoodEntryCreate, {"moodValue": 5}) == "MISSING_MOOD_LABEL"
    assert error_code(MoodEntryCreate, {"moodValue": 5, "moodLabel": "ecstatic"}) == "INVALID_MOOD_LABEL"


@pytest.mark.parametrize("quality", [0, 11])
def test_sleep_quality_bounds(quality):
    body = {"hoursSlept": 7, "quality": quality, "sleepDate": "2024-01-10"}
    assert error_code(SleepEntryCreate, body) == "INVALID_QUALITY"


@pytest.mark.parametrize("quality", [1, 10])
def test_sleep_quality_accepts_bounds(quality):
    body = {"hoursSlept": 7, "quality": quality, "sleepDate": "2024-01-10"}
    assert parse_payload(SleepEntryCreate, body)["quality"] == quality


@pytest.mark.parametrize("level", [0, 11])
def test_stress_level_bounds(level):
    assert error_code(StressEntryCreate, {"stressLevel": level}) == "INVALID_STRESS_LEVEL"


@pytest.mark.parametrize("level", [1, 10])
def test_stress_level_accepts_bounds(level):
    assert parse_payload(StressEntryCreate, {"stressLevel": level})["stress_level"] == level


@pytest.mark.parametrize("sleep_date", ["2024-13-40", "2023-02-29", "24-01-01", "2024/01/01", 20240101])
def test_sleep_date_must_be_a_real_day(sleep_date):
    body = {"hoursSlept": 7, "quality": 5, "sleepDate": sleep_date}
    assert error_code(SleepEntryCreate, body) == "INVALID_DATE_FORMAT"


def test_sleep_date_accepts_leap_day():
    body = {"hoursSlept": 7, "quality": 5, "sleepDate": "2024-02-29"}
    assert parse_payload(SleepEntryCreate, body)["sleep_date"] == date(2024, 2, 29)


def test_sleep_requires_positive_hours():
    body = {"hoursSlept": 0, "quality": 5, "sleepDate": "2024-01-01"}
    assert error_code(SleepEntryCreate, body) == "INVALID_HOURS_SLEPT"
    assert error_code(SleepEntryCreate, {"quality": 5, "sleepDate": "2024-01-01"}) == "MISSING_HOURS_SLEPT"


def test_activity_date_format_and_calendar_codes():
    base = {"activityName": "Walk", "completed": True}
    assert error_code(ActivityCompletionCreate, {**base, "completionDate": "03/01/2024"}) == "INVALID_DATE_FORMAT"
    assert error_code(ActivityCompletionCreate, {**base, "completionDate": "2024-13-40"}) == "INVALID_DATE"
    assert error_code(ActivityCompletionCreate, base) == "MISSING_COMPLETION_DATE"


def test_activity_name_and_completed_codes():
    base = {"completed": True, "completionDate": "2024-03-01"}
    assert error_code(ActivityCompletionCreate, base) == "MISSING_ACTIVITY_NAME"
    assert error_code(ActivityCompletionCreate, {**base, "activityName": "   "}) == "EMPTY_ACTIVITY_NAME"
    body = {"activityName": "Walk", "completed": "yes", "completionDate": "2024-03-01"}
    assert error_code(ActivityCompletionCreate, body) == "INVALID_COMPLETED"
    assert error_code(ActivityCompletionUpdate, {"activityName": ""}, partial=True) == "EMPTY_ACTIVITY_NAME"


def test_task_defaults_and_enums():
    values = parse_payload(TaskCreate, {"title": "Stretch"})
    assert values["status"] == "pending"
    assert values["priority"] == "medium"
    assert values["due_date"] is None
    assert error_code(TaskCreate, {"title": "Stretch", "priority": "urgent"}) == "INVALID_PRIORITY"
    assert error_code(TaskCreate, {"title": "Stretch", "status": "done"}) == "INVALID_STATUS"


@pytest.mark.parametrize(
    "due_date", ["2024-05-01T09:00:00Z", "2024-05-01T09:00:00.000Z", "2024-05-01T09:00:00"]
)
def test_task_due_date_accepts_iso8601(due_date):
    assert parse_payload(TaskCreate, {"title": "Stretch", "dueDate": due_date})["due_date"] == due_date


@pytest.mark.parametrize("due_date", ["2024-05-01", "tomorrow", "2024-02-30T09:00:00Z"])
def test_task_due_date_rejects_other_formats(due_date):
    assert error_code(TaskCreate, {"title": "Stretch", "dueDate": due_date}) == "INVALID_DUE_DATE"


def test_task_update_can_clear_due_date():
    assert parse_payload(TaskUpdate, {"dueDate": None}, partial=True) == {"due_date": None}
    assert parse_payload(TaskUpdate, {"dueDate": ""}, partial=True) == {"due_date": None}


def test_partial_update_keeps_only_present_fields():
    assert parse_payload(TaskUpdate, {}, partial=True) == {}
    assert parse_payload(TaskUpdate, {"priority": "low"}, partial=True) == {"priority": "low"}
    assert error_code(TaskUpdate, {"status": None}, partial=True) == "INVALID_STATUS"


def test_goal_status_defaults_to_active():
    assert parse_payload(GoalCreate, {"title": "Read more"})["status"] == "active"
    assert error_code(GoalCreate, {"title": "Read more", "status": "paused"}) == "INVALID_STATUS"


def test_chat_role_codes():
    assert error_code(ChatMessageCreate, {"message": "hi"}) == "MISSING_ROLE"
    assert error_code(ChatMessageCreate, {"message": "hi", "role": "system"}) == "INVALID_ROLE"
    assert error_code(ChatMessageCreate, {"message": "  ", "role": "user"}) == "MISSING_MESSAGE"


def test_meditation_rules():
    assert error_code(MeditationSessionCreate, {"duration": 0, "type": "guided", "completed": True}) == (
        "INVALID_DURATION"
    )
    assert error_code(MeditationSessionCreate, {"duration": 60, "completed": True}) == "MISSING_TYPE"
    assert error_code(MeditationSessionCreate, {"duration": 60, "type": "guided"}) == "INVALID_COMPLETED"
    assert error_code(MeditationSessionCreate, {"duration": "60", "type": "guided", "completed": True}) == (
        "INVALID_DURATION"
    )


def test_breathing_rules():
    assert error_code(BreathingSessionCreate, {"technique": "box"}) == "MISSING_REQUIRED_FIELD"
    assert error_code(BreathingSessionCreate, {"durationSeconds": 60}) == "MISSING_REQUIRED_FIELD"
    assert error_code(BreathingSessionCreate, {"durationSeconds": -1, "technique": "box"}) == "INVALID_DURATION"
    assert error_code(BreathingSessionCreate, {"durationSeconds": 60, "technique": "4-4-4"}) == (
        "INVALID_TECHNIQUE"
    )


@pytest.mark.parametrize(
    "schema, body, code",
    [
        (BreathingSessionCreate, {"durationSeconds": 10**20, "technique": "box"}, "INVALID_DURATION"),
        (MeditationSessionCreate, {"duration": 10**20, "type": "guided", "completed": True}, "INVALID_DURATION"),
        (SleepEntryCreate, {"hoursSlept": 10**19, "quality": 5, "sleepDate": "2024-01-01"}, "INVALID_HOURS_SLEPT"),
    ],
)
def test_unbounded_integers_are_capped_at_column_range(schema, body, code):
    assert error_code(schema, body) == code


def test_largest_storable_integer_is_accepted():
    values = parse_payload(BreathingSessionCreate, {"durationSeconds": 2**63 - 1, "technique": "box"})
    assert values["duration_seconds"] == 2**63 - 1


@pytest.mark.parametrize(
    "description, expected",
    [(42, "42"), (1.5, "1.5"), (3.0, "3"), (True, "true"), (False, None), (0, None), ("  notes  ", "notes")],
)
def test_description_coerces_scalars(description, expected):
    assert parse_payload(GoalCreate, {"title": "Read", "description": description})["description"] == expected
    assert parse_payload(TaskCreate, {"title": "Read", "description": description})["description"] == expected
    assert parse_payload(TaskUpdate, {"description": description}, partial=True) == {"description": expected}


def test_goal_target_date_coerces_scalars():
    assert parse_payload(GoalCreate, {"title": "Read", "targetDate": 2025})["target_date"] == "2025"


@pytest.mark.parametrize("description", [{"text": "x"}, ["x"]])
def test_description_rejects_objects(description):
    assert error_code(GoalCreate, {"title": "Read", "description": description}) == "INVALID_DESCRIPTION"
