"""Read-only projections over tasks for dashboards and per-officer summaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from workdesk.domain.entities import TaskEntity, UserEntity
from workdesk.domain.enums import TaskStatus, UserRole
from workdesk.domain.filters import (
    DUE_SOON_WINDOW,
    is_due_soon,
    is_effectively_overdue,
    needs_recurring_attention,
    visible_to,
)


@dataclass(frozen=True)
class DashboardStats:
    total: int
    pending: int
    in_progress: int
    completed: int
    overdue: int
    due_soon: int


@dataclass(frozen=True)
class OfficerStats:
    user: UserEntity
    total: int
    completed: int
    todo: int
    overdue: int
    completion_rate: int


def _count(tasks: Iterable[TaskEntity], status: TaskStatus) -> int:
    return sum(1 for task in tasks if task.status == status)


def dashboard_stats(
    tasks: Iterable[TaskEntity],
    viewer: UserEntity | None,
    now: datetime,
    due_soon_window: timedelta = DUE_SOON_WINDOW,
) -> DashboardStats:
    base = visible_to(tasks, viewer)
    return DashboardStats(
        total=len(base),
        pending=_count(base, TaskStatus.PENDING),
        in_progress=_count(base, TaskStatus.IN_PROGRESS),
        completed=_count(base, TaskStatus.COMPLETED),
        overdue=sum(1 for task in base if is_effectively_overdue(task, now)),
        due_soon=sum(1 for task in base if is_due_soon(task, now, due_soon_window)),
    )


def officer_stats(
    users: Iterable[UserEntity], tasks: Iterable[TaskEntity], now: datetime
) -> list[OfficerStats]:
    tasks = list(tasks)
    result = []
    for officer in (u for u in users if u.role == UserRole.OFFICER):
        own = [task for task in tasks if task.assignee_id == officer.id]
        completed = _count(own, TaskStatus.COMPLETED)
        result.append(
            OfficerStats(
                user=officer,
                total=len(own),
                completed=completed,
                todo=_count(own, TaskStatus.PENDING) + _count(own, TaskStatus.IN_PROGRESS),
                overdue=sum(1 for task in own if is_effectively_overdue(task, now)),
                completion_rate=round(completed / len(own) * 100) if own else 0,
            )
        )
    return sorted(result, key=lambda stat: stat.todo, reverse=True)


def unread_proposals(tasks: Iterable[TaskEntity]) -> list[TaskEntity]:
    return [task for task in tasks if task.has_proposal and not task.is_proposal_read]


def proposal_history(tasks: Iterable[TaskEntity]) -> list[TaskEntity]:
    return [task for task in tasks if task.has_proposal]


def recurring_alerts(tasks: Iterable[TaskEntity], viewer: UserEntity | None) -> list[TaskEntity]:
    if viewer is None or not viewer.is_manager:
        return []
    return [task for task in tasks if needs_recurring_attention(task)]
