"""Default data set written to an empty store on first access."""

from __future__ import annotations

from datetime import datetime, timedelta
from urllib.parse import quote_plus

from workdesk.domain.entities import NotificationEntity, TaskEntity, UserEntity
from workdesk.domain.enums import (
    NotificationKind,
    RecurrenceKind,
    TaskPriority,
    TaskStatus,
    UserRole,
)

DEFAULT_PASSWORD = "123123"

_MANAGER_COLOR = "ef4444"
_OFFICER_COLOR = "059669"

_USERS = [
    ("u1", "mhale", "Morgan Hale", UserRole.MANAGER),
    ("u2", "rquinn", "Riley Quinn", UserRole.MANAGER),
    ("u3", "sbrooks", "Sam Brooks", UserRole.OFFICER),
    ("u4", "jpark", "Jordan Park", UserRole.OFFICER),
    ("u5", "aellis", "Alex Ellis", UserRole.OFFICER),
    ("u6", "tnovak", "Taylor Novak", UserRole.OFFICER),
]


def avatar_url(full_name: str, background: str = "random") -> str:
    return (
        f"https://ui-avatars.com/api/?name={quote_plus(full_name)}"
        f"&background={background}&color=fff"
    )


def default_users() -> list[UserEntity]:
    return [
        UserEntity(
            id=user_id,
            username=username,
            full_name=full_name,
            role=role,
            password=DEFAULT_PASSWORD,
            is_first_login=True,
            avatar_url=avatar_url(
                full_name, _MANAGER_COLOR if role == UserRole.MANAGER else _OFFICER_COLOR
            ),
        )
        for user_id, username, full_name, role in _USERS
    ]


def default_tasks(now: datetime) -> list[TaskEntity]:
    return [
        TaskEntity(
            id="t1",
            title="Review zoning plan for district B",
            description="Review the plan as directed by the city office. Report back before the 25th.",
            proposal="Contacted the land office, the new map has not arrived yet. Requesting a 2 day extension.",
            dispatch_number="128/CO-UP",
            issuing_authority="City Office",
            issue_date="2024-05-15",
            assignee_id="u3",
            creator_id="u1",
            recurring=RecurrenceKind.NONE,
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            due_date=now - timedelta(days=1),
            created_at=now,
            suggested_steps=(
                "Collect the previous planning files",
                "Survey the current site",
                "Write the comparison report",
            ),
        ),
        TaskEntity(
            id="t2",
            title="Monthly compensation figures report",
            description="Compile the figures and report to the planning department.",
            dispatch_number="45/PL-ENV",
            issuing_authority="Environment Department",
            issue_date="2024-05-20",
            assignee_id="u6",
            creator_id="u2",
            recurring=RecurrenceKind.MONTHLY,
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            due_date=now + timedelta(days=2),
            created_at=now - timedelta(seconds=100),
        ),
    ]


def default_notifications(now: datetime) -> list[NotificationEntity]:
    return [
        NotificationEntity(
            id="n1",
            user_id="u3",
            title="New task",
            message="You have been assigned: Review zoning plan for district B",
            type=NotificationKind.TASK_ASSIGNED,
            created_at=now - timedelta(hours=1),
            task_id="t1",
        ),
        NotificationEntity(
            id="n2",
            user_id="u3",
            title="Deadline warning",
            message='Task "Review zoning plan for district B" is overdue!',
            type=NotificationKind.DEADLINE_WARNING,
            created_at=now,
            task_id="t1",
        ),
    ]


def default_dataset(collection: str, now: datetime) -> list:
    if collection == "users":
        return default_users()
    if collection == "tasks":
        return default_tasks(now)
    if collection == "notifications":
        return default_notifications(now)
    raise KeyError(collection)
