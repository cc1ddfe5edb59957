from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from .entities import TaskEntity, UserEntity
from .enums import CLOSED_STATUSES, RecurrenceKind, TaskStatus

DUE_SOON_WINDOW = timedelta(days=3)

FILTER_ALL = "ALL"
FILTER_DUE_SOON = "DUE_SOON"
FILTER_OVERDUE = "OVERDUE"
FILTER_RECURRING = "RECURRING"


def is_effectively_overdue(task: TaskEntity, now: datetime) -> bool:
    if task.status == TaskStatus.OVERDUE:
        return True
    return task.due_date < now and task.status not in CLOSED_STATUSES


def is_due_soon(task: TaskEntity, now: datetime, window: timedelta = DUE_SOON_WINDOW) -> bool:
    if task.status in CLOSED_STATUSES or task.status == TaskStatus.OVERDUE:
        return False
    return now <= task.due_date <= now + window


def needs_recurring_attention(task: TaskEntity) -> bool:
    return task.recurring != RecurrenceKind.NONE and task.status not in CLOSED_STATUSES


@dataclass(frozen=True)
class TaskFilters:
    status: str = FILTER_ALL
    assignee_id: str | None = None
    search: str | None = None
    due_soon_window: timedelta = DUE_SOON_WINDOW


def visible_to(tasks: Iterable[TaskEntity], viewer: UserEntity | None) -> list[TaskEntity]:
    """Officers only ever see the tasks assigned to them."""
    if viewer is None or viewer.is_manager:
        return list(tasks)
    return [task for task in tasks if task.assignee_id == viewer.id]


def _matches_status(task: TaskEntity, filters: TaskFilters, now: datetime) -> bool:
    key = filters.status
    if key == FILTER_ALL:
        return True
    if key == FILTER_DUE_SOON:
        return is_due_soon(task, now, filters.due_soon_window)
    if key == FILTER_OVERDUE:
        return is_effectively_overdue(task, now)
    if key == FILTER_RECURRING:
        return needs_recurring_attention(task)
    return task.status == TaskStatus(key)


def _matches_search(task: TaskEntity, search: str) -> bool:
    needle = search.lower()
    haystacks = [task.title, task.description, task.dispatch_number or ""]
    return any(needle in text.lower() for text in haystacks)


def apply_filters(
    tasks: Iterable[TaskEntity],
    filters: TaskFilters,
    now: datetime,
    viewer: UserEntity | None = None,
) -> list[TaskEntity]:
    result = visible_to(tasks, viewer)
    if filters.assignee_id and (viewer is None or viewer.is_manager):
        result = [task for task in result if task.assignee_id == filters.assignee_id]
    result = [task for task in result if _matches_status(task, filters, now)]
    if filters.search:
        result = [task for task in result if _matches_search(task, filters.search)]
    return sorted(result, key=lambda task: task.created_at, reverse=True)
