"""
Tasks and goals.
"""

from typing import Any, List, Mapping

from sqlalchemy import case

from models.planner import Goal, Task
from models.schemas import (
    GOAL_STATUSES,
    INVALID_PRIORITY,
    INVALID_STATUS_GOAL,
    INVALID_STATUS_TASK,
    TASK_PRIORITIES,
    TASK_STATUSES,
    GoalCreate,
    GoalOut,
    GoalUpdate,
    TaskCreate,
    TaskOut,
    TaskUpdate,
)
from routers.resource_router import Resource, build_router, choice_filter, timestamp_range
from utils.helpers import utcnow


PRIORITY_RANK = case({"high": 3, "medium": 2, "low": 1}, value=Task.priority, else_=0)


def overdue_filter(params: Mapping[str, str]) -> List[Any]:
    """``?overdue=true``: past due and not completed."""
    if params.get("overdue") != "true":
        return []
    now = utcnow().strftime("%Y-%m-%dT%H:%M:%S")
    return [Task.due_date.isnot(None), Task.due_date < now, Task.status != "completed"]


task_resource = Resource(
    path="/tasks",
    model=Task,
    create_schema=TaskCreate,
    update_schema=TaskUpdate,
    out_schema=TaskOut,
    label="Task",
    not_found_code="TASK_NOT_FOUND",
    delete_key="task",
    order_by=[PRIORITY_RANK.desc(), Task.due_date.asc().nulls_last(), Task.id.asc()],
    filters=[
        choice_filter("status", Task.status, TASK_STATUSES, *INVALID_STATUS_TASK),
        choice_filter("priority", Task.priority, TASK_PRIORITIES, *INVALID_PRIORITY),
        overdue_filter,
    ],
    tracks_updated_at=True,
    tag="tasks",
)

goal_resource = Resource(
    path="/goals",
    model=Goal,
    create_schema=GoalCreate,
    update_schema=GoalUpdate,
    out_schema=GoalOut,
    label="Goal",
    not_found_code="GOAL_NOT_FOUND",
    delete_key="goal",
    filters=[
        choice_filter("status", Goal.status, GOAL_STATUSES, *INVALID_STATUS_GOAL),
        timestamp_range(Goal.created_at),
    ],
    tracks_updated_at=True,
    tag="goals",
)

task_router = build_router(task_resource)
goal_router = build_router(goal_resource)
