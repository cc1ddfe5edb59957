from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .enums import (
    NotificationKind,
    RecurrenceKind,
    ResponseType,
    TaskPriority,
    TaskStatus,
    UserRole,
)


@dataclass(frozen=True)
class UserEntity:
    id: str
    username: str
    full_name: str
    role: UserRole
    password: str = ""
    is_first_login: bool = False
    avatar_url: str | None = None

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER


@dataclass(frozen=True)
class ManagerResponse:
    type: ResponseType
    responded_at: datetime
    content: str = ""


@dataclass(frozen=True)
class TaskEntity:
    id: str
    title: str
    description: str
    assignee_id: str
    creator_id: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime
    created_at: datetime
    proposal: str | None = None
    is_proposal_read: bool = False
    manager_response: Optional[ManagerResponse] = None
    dispatch_number: str | None = None
    issuing_authority: str | None = None
    issue_date: str | None = None
    recurring: RecurrenceKind = RecurrenceKind.NONE
    suggested_steps: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_proposal(self) -> bool:
        return bool(self.proposal and self.proposal.strip())


@dataclass(frozen=True)
class NotificationEntity:
    id: str
    user_id: str
    title: str
    message: str
    type: NotificationKind
    created_at: datetime
    is_read: bool = False
    task_id: str | None = None
