from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from workdesk.domain.entities import TaskEntity, UserEntity
from workdesk.domain.enums import RecurrenceKind, TaskPriority, TaskStatus, UserRole
from workdesk.domain.errors import StoreUnavailableError
from workdesk.infra.store import Collection, find_login

NOW = datetime(2024, 5, 10, 9, 30, tzinfo=timezone.utc)


class FakeStore:
    """In-memory record store; collections start empty and are never seeded."""

    def __init__(self) -> None:
        self.collections: dict[Collection, list] = {c: [] for c in Collection}
        self.writes: list[Collection] = []
        self.fail_writes: set[Collection] = set()

    def get_all(self, collection: Collection) -> list:
        return list(self.collections[collection])

    def replace_all(self, collection: Collection, records: Sequence) -> None:
        if collection in self.fail_writes:
            raise StoreUnavailableError(f"write to {collection.value} failed")
        self.writes.append(collection)
        self.collections[collection] = list(records)

    def login(self, username: str, password: str) -> UserEntity | None:
        return find_login(self.collections[Collection.USERS], username, password)

    @property
    def tasks(self) -> list[TaskEntity]:
        return self.collections[Collection.TASKS]

    @property
    def notifications(self) -> list:
        return self.collections[Collection.NOTIFICATIONS]


class FixedClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current


class SequentialIds:
    def __init__(self) -> None:
        self._next = 1

    def new_id(self, prefix: str = "") -> str:
        value = f"gen-{prefix}{self._next}"
        self._next += 1
        return value


def make_user(user_id: str, role: UserRole = UserRole.OFFICER, **overrides) -> UserEntity:
    values = dict(
        id=user_id,
        username=user_id,
        full_name=f"User {user_id}",
        role=role,
        password="secret1",
    )
    values.update(overrides)
    return UserEntity(**values)


def make_task(task_id: str = "t1", **overrides) -> TaskEntity:
    values = dict(
        id=task_id,
        title="Quarterly report",
        description="Compile the figures.",
        assignee_id="officer",
        creator_id="manager",
        status=TaskStatus.PENDING,
        priority=TaskPriority.MEDIUM,
        due_date=datetime(2024, 5, 15, tzinfo=timezone.utc),
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        recurring=RecurrenceKind.NONE,
    )
    values.update(overrides)
    return TaskEntity(**values)
