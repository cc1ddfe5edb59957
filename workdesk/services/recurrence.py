from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

from workdesk.domain.entities import TaskEntity
from workdesk.domain.enums import RecurrenceKind, TaskStatus

_MONTH_STEPS = {
    RecurrenceKind.MONTHLY: 1,
    RecurrenceKind.QUARTERLY: 3,
}


def next_due_date(current: datetime, kind: RecurrenceKind) -> datetime:
    """Advance a due date by one recurrence period.

    Month steps clamp the day to the end of the target month, so
    Jan 31 + 1 month is the last day of February.
    """
    if kind == RecurrenceKind.WEEKLY:
        return current + timedelta(weeks=1)
    if kind in _MONTH_STEPS:
        return _add_months(current, _MONTH_STEPS[kind])
    raise ValueError(f"Task recurrence {kind!r} has no next due date")


def spawn_next(task: TaskEntity, *, new_id: str, now: datetime) -> TaskEntity:
    return replace(
        task,
        id=new_id,
        status=TaskStatus.PENDING,
        due_date=next_due_date(task.due_date, task.recurring),
        created_at=now,
    )


def _add_months(base: datetime, months: int) -> datetime:
    year = base.year + (base.month - 1 + months) // 12
    month = (base.month - 1 + months) % 12 + 1
    day = min(base.day, _days_in_month(year, month))
    return base.replace(year=year, month=month, day=day)


def _days_in_month(year: int, month: int) -> int:
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    return (next_month - timedelta(days=1)).day
