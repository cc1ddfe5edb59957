from __future__ import annotations

from enum import StrEnum


class UserRole(StrEnum):
    MANAGER = "MANAGER"
    OFFICER = "OFFICER"


class TaskStatus(StrEnum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    OVERDUE = "OVERDUE"


class TaskPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class RecurrenceKind(StrEnum):
    NONE = "NONE"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"


class ResponseType(StrEnum):
    AGREE = "AGREE"
    REJECT = "REJECT"
    OTHER = "OTHER"


class NotificationKind(StrEnum):
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_UPDATED = "TASK_UPDATED"
    DEADLINE_WARNING = "DEADLINE_WARNING"
    SYSTEM = "SYSTEM"
    PROPOSAL_RESPONSE = "PROPOSAL_RESPONSE"


CLOSED_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})
