from __future__ import annotations

import logging
from dataclasses import replace

from workdesk.domain.entities import UserEntity
from workdesk.domain.enums import UserRole
from workdesk.domain.errors import ValidationError
from workdesk.infra.seed import DEFAULT_PASSWORD, avatar_url
from workdesk.infra.store import Collection, RecordStore

from .clock import IdGenerator

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserService:
    def __init__(self, store: RecordStore, ids: IdGenerator | None = None) -> None:
        self._store = store
        self._ids = ids or IdGenerator()

    def list_users(self) -> list[UserEntity]:
        return self._store.get_all(Collection.USERS)

    def list_officers(self) -> list[UserEntity]:
        return [u for u in self.list_users() if u.role == UserRole.OFFICER]

    def login(self, username: str, password: str) -> UserEntity | None:
        user = self._store.login(username.strip(), password)
        if user is None:
            logger.info("Failed login for %s", username)
        return user

    def change_password(self, user: UserEntity, new_password: str, confirm_password: str) -> UserEntity:
        if new_password != confirm_password:
            raise ValidationError("Password confirmation does not match.")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        updated = replace(user, password=new_password, is_first_login=False)
        self.update_user(updated)
        return updated

    def create_user(
        self,
        username: str,
        full_name: str,
        role: UserRole,
        password: str | None = None,
    ) -> UserEntity:
        username = username.strip()
        if not username:
            raise ValidationError("Username is required.")
        users = self.list_users()
        if any(u.username == username for u in users):
            raise ValidationError("Username already exists.")
        user = UserEntity(
            id=self._ids.new_id("u"),
            username=username,
            full_name=full_name,
            role=role,
            password=password or DEFAULT_PASSWORD,
            is_first_login=True,
            avatar_url=avatar_url(full_name),
        )
        self._store.replace_all(Collection.USERS, [*users, user])
        return user

    def update_user(self, user: UserEntity, password: str | None = None) -> None:
        """Replace a stored user; a blank ``password`` keeps the current one."""
        users = self.list_users()
        index = next((i for i, u in enumerate(users) if u.id == user.id), None)
        if index is None:
            return
        if any(u.username == user.username and u.id != user.id for u in users):
            raise ValidationError("Username already exists.")
        if password:
            user = replace(user, password=password)
        elif not user.password:
            user = replace(user, password=users[index].password)
        if not user.avatar_url:
            user = replace(user, avatar_url=avatar_url(user.full_name))
        users[index] = user
        self._store.replace_all(Collection.USERS, users)

    def delete_user(self, user_id: str) -> None:
        users = self.list_users()
        self._store.replace_all(Collection.USERS, [u for u in users if u.id != user_id])
