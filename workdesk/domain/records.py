"""Conversion between entities and the JSON record shape shared by every store.

Records use the camelCase keys of the shared data set. Timestamps that the
data set stores as numbers are epoch milliseconds; due dates are ISO 8601
text.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from .entities import ManagerResponse, NotificationEntity, TaskEntity, UserEntity
from .enums import (
    NotificationKind,
    RecurrenceKind,
    ResponseType,
    TaskPriority,
    TaskStatus,
    UserRole,
)

Record = dict[str, Any]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def to_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // _MILLISECOND


def from_millis(value: int | float) -> datetime:
    return _EPOCH + timedelta(milliseconds=value)


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def from_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def user_to_record(user: UserEntity) -> Record:
    record: Record = {
        "id": user.id,
        "username": user.username,
        "password": user.password,
        "isFirstLogin": user.is_first_login,
        "fullName": user.full_name,
        "role": user.role.value,
    }
    if user.avatar_url:
        record["avatarUrl"] = user.avatar_url
    return record


def user_from_record(record: Record) -> UserEntity:
    return UserEntity(
        id=str(record["id"]),
        username=record["username"],
        full_name=record.get("fullName", ""),
        role=UserRole(record.get("role", UserRole.OFFICER.value)),
        password=record.get("password", ""),
        is_first_login=bool(record.get("isFirstLogin", False)),
        avatar_url=record.get("avatarUrl"),
    )


def _response_to_record(response: ManagerResponse) -> Record:
    return {
        "type": response.type.value,
        "content": response.content,
        "respondedAt": to_millis(response.responded_at),
    }


def _response_from_record(record: Record | None) -> ManagerResponse | None:
    if not record:
        return None
    return ManagerResponse(
        type=ResponseType(record["type"]),
        content=record.get("content") or "",
        responded_at=from_millis(record["respondedAt"]),
    )


def task_to_record(task: TaskEntity) -> Record:
    record: Record = {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "isProposalRead": task.is_proposal_read,
        "recurring": task.recurring.value,
        "assigneeId": task.assignee_id,
        "creatorId": task.creator_id,
        "status": task.status.value,
        "priority": task.priority.value,
        "dueDate": to_iso(task.due_date),
        "createdAt": to_millis(task.created_at),
    }
    optional = {
        "proposal": task.proposal,
        "dispatchNumber": task.dispatch_number,
        "issuingAuthority": task.issuing_authority,
        "issueDate": task.issue_date,
    }
    record.update({key: value for key, value in optional.items() if value is not None})
    if task.manager_response is not None:
        record["managerResponse"] = _response_to_record(task.manager_response)
    if task.suggested_steps:
        record["aiSuggestedSteps"] = list(task.suggested_steps)
    return record


def task_from_record(record: Record) -> TaskEntity:
    return TaskEntity(
        id=str(record["id"]),
        title=record.get("title", ""),
        description=record.get("description", ""),
        assignee_id=str(record.get("assigneeId", "")),
        creator_id=str(record.get("creatorId", "")),
        status=TaskStatus(record.get("status", TaskStatus.PENDING.value)),
        priority=TaskPriority(record.get("priority", TaskPriority.MEDIUM.value)),
        due_date=from_iso(record["dueDate"]),
        created_at=from_millis(record["createdAt"]),
        proposal=record.get("proposal"),
        is_proposal_read=bool(record.get("isProposalRead", False)),
        manager_response=_response_from_record(record.get("managerResponse")),
        dispatch_number=record.get("dispatchNumber"),
        issuing_authority=record.get("issuingAuthority"),
        issue_date=record.get("issueDate"),
        recurring=RecurrenceKind(record.get("recurring") or RecurrenceKind.NONE.value),
        suggested_steps=tuple(record.get("aiSuggestedSteps") or ()),
    )


def notification_to_record(notification: NotificationEntity) -> Record:
    record: Record = {
        "id": notification.id,
        "userId": notification.user_id,
        "title": notification.title,
        "message": notification.message,
        "isRead": notification.is_read,
        "createdAt": to_millis(notification.created_at),
        "type": notification.type.value,
    }
    if notification.task_id is not None:
        record["taskId"] = notification.task_id
    return record


def notification_from_record(record: Record) -> NotificationEntity:
    task_id = record.get("taskId")
    return NotificationEntity(
        id=str(record["id"]),
        user_id=str(record["userId"]),
        title=record.get("title", ""),
        message=record.get("message", ""),
        type=NotificationKind(record.get("type", NotificationKind.SYSTEM.value)),
        created_at=from_millis(record["createdAt"]),
        is_read=bool(record.get("isRead", False)),
        task_id=str(task_id) if task_id is not None else None,
    )
