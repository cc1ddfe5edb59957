from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from workdesk.domain.entities import (
    ManagerResponse,
    NotificationEntity,
    TaskEntity,
    UserEntity,
)
from workdesk.domain.enums import (
    NotificationKind,
    RecurrenceKind,
    ResponseType,
    TaskPriority,
    TaskStatus,
    UserRole,
)
from workdesk.domain.errors import StoreUnavailableError
from workdesk.services.clock import utcnow

from .models import NotificationModel, SeededCollectionModel, TaskModel, UserModel
from .seed import default_dataset
from .store import Collection, Entity, find_login, hash_user_passwords

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo; every stored timestamp is UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc)
    return value


def _user_to_entity(model: UserModel) -> UserEntity:
    return UserEntity(
        id=model.id,
        username=model.username,
        full_name=model.full_name,
        role=UserRole(model.role),
        password=model.password,
        is_first_login=model.is_first_login,
        avatar_url=model.avatar_url,
    )


def _user_to_model(user: UserEntity, position: int) -> UserModel:
    return UserModel(
        id=user.id,
        username=user.username,
        password=user.password,
        is_first_login=user.is_first_login,
        full_name=user.full_name,
        role=user.role.value,
        avatar_url=user.avatar_url,
        position=position,
    )


def _task_to_entity(model: TaskModel) -> TaskEntity:
    response = None
    if model.response_type:
        response = ManagerResponse(
            type=ResponseType(model.response_type),
            content=model.response_content or "",
            responded_at=_aware(model.responded_at),
        )
    return TaskEntity(
        id=model.id,
        title=model.title,
        description=model.description,
        assignee_id=model.assignee_id,
        creator_id=model.creator_id,
        status=TaskStatus(model.status),
        priority=TaskPriority(model.priority),
        due_date=_aware(model.due_date),
        created_at=_aware(model.created_at),
        proposal=model.proposal,
        is_proposal_read=model.is_proposal_read,
        manager_response=response,
        dispatch_number=model.dispatch_number,
        issuing_authority=model.issuing_authority,
        issue_date=model.issue_date,
        recurring=RecurrenceKind(model.recurring),
        suggested_steps=tuple(model.suggested_steps or ()),
    )


def _task_to_model(task: TaskEntity, position: int) -> TaskModel:
    response = task.manager_response
    return TaskModel(
        id=task.id,
        title=task.title,
        description=task.description,
        proposal=task.proposal,
        is_proposal_read=task.is_proposal_read,
        response_type=response.type.value if response else None,
        response_content=response.content if response else None,
        responded_at=_utc(response.responded_at) if response else None,
        dispatch_number=task.dispatch_number,
        issuing_authority=task.issuing_authority,
        issue_date=task.issue_date,
        recurring=task.recurring.value,
        assignee_id=task.assignee_id,
        creator_id=task.creator_id,
        status=task.status.value,
        priority=task.priority.value,
        due_date=_utc(task.due_date),
        created_at=_utc(task.created_at),
        suggested_steps=list(task.suggested_steps),
        position=position,
    )


def _notification_to_entity(model: NotificationModel) -> NotificationEntity:
    return NotificationEntity(
        id=model.id,
        user_id=model.user_id,
        title=model.title,
        message=model.message,
        type=NotificationKind(model.type),
        created_at=_aware(model.created_at),
        is_read=model.is_read,
        task_id=model.task_id,
    )


def _notification_to_model(notification: NotificationEntity, position: int) -> NotificationModel:
    return NotificationModel(
        id=notification.id,
        user_id=notification.user_id,
        title=notification.title,
        message=notification.message,
        is_read=notification.is_read,
        created_at=_utc(notification.created_at),
        type=notification.type.value,
        task_id=notification.task_id,
        position=position,
    )


_MAPPINGS: dict[Collection, tuple[type, Callable, Callable]] = {
    Collection.USERS: (UserModel, _user_to_entity, _user_to_model),
    Collection.TASKS: (TaskModel, _task_to_entity, _task_to_model),
    Collection.NOTIFICATIONS: (NotificationModel, _notification_to_entity, _notification_to_model),
}


class SqlRecordStore:
    """Local persistence over SQLAlchemy; one table per collection."""

    def __init__(self, session_factory: sessionmaker, clock: Callable[[], datetime] = utcnow) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def get_all(self, collection: Collection) -> list:
        model, to_entity, _ = _MAPPINGS[collection]
        try:
            with self._session_factory() as session:
                rows = session.scalars(select(model).order_by(model.position.asc())).all()
                if rows or self._is_seeded(session, collection):
                    return [to_entity(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not read {collection.value}: {exc}") from exc

        records = default_dataset(collection.value, self._clock())
        logger.info("Seeding empty collection %s with %s records", collection.value, len(records))
        self.replace_all(collection, records)
        return self.get_all(collection)

    def replace_all(self, collection: Collection, records: Sequence[Entity]) -> None:
        model, _, to_model = _MAPPINGS[collection]
        if collection == Collection.USERS:
            records = hash_user_passwords(records)
        try:
            with self._session_factory() as session:
                with session.begin():
                    session.execute(delete(model))
                    session.add_all(to_model(record, index) for index, record in enumerate(records))
                    self._mark_seeded(session, collection)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not write {collection.value}: {exc}") from exc
        logger.debug("Replaced %s with %s records", collection.value, len(records))

    def login(self, username: str, password: str) -> UserEntity | None:
        return find_login(self.get_all(Collection.USERS), username, password)

    @staticmethod
    def _is_seeded(session: Session, collection: Collection) -> bool:
        return session.get(SeededCollectionModel, collection.value) is not None

    @staticmethod
    def _mark_seeded(session: Session, collection: Collection) -> None:
        if session.get(SeededCollectionModel, collection.value) is None:
            session.add(SeededCollectionModel(name=collection.value))
