"""Record store contract shared by the local and remote backends.

Every write replaces a whole collection. Backends raise
``StoreUnavailableError`` for any read or write failure.
"""

from __future__ import annotations

from dataclasses import replace
from enum import StrEnum
from typing import Iterable, Protocol, Sequence, Union

from workdesk.domain.entities import NotificationEntity, TaskEntity, UserEntity

from .passwords import hash_password, is_hashed, verify_password

Entity = Union[UserEntity, TaskEntity, NotificationEntity]


class Collection(StrEnum):
    USERS = "users"
    TASKS = "tasks"
    NOTIFICATIONS = "notifications"


class RecordStore(Protocol):
    def get_all(self, collection: Collection) -> list: ...

    def replace_all(self, collection: Collection, records: Sequence[Entity]) -> None: ...

    def login(self, username: str, password: str) -> UserEntity | None: ...


def hash_user_passwords(users: Iterable[UserEntity]) -> list[UserEntity]:
    return [
        user if not user.password or is_hashed(user.password)
        else replace(user, password=hash_password(user.password))
        for user in users
    ]


def find_login(users: Iterable[UserEntity], username: str, password: str) -> UserEntity | None:
    for user in users:
        if user.username == username and verify_password(password, user.password):
            return user
    return None
