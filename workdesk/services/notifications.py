from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from workdesk.domain.entities import NotificationEntity, TaskEntity
from workdesk.domain.enums import NotificationKind, ResponseType


class NotificationEvent(StrEnum):
    TASK_ASSIGNED = "task_assigned"
    RECURRENCE_SPAWNED = "recurrence_spawned"
    PROPOSAL_SUBMITTED = "proposal_submitted"
    PROPOSAL_ANSWERED = "proposal_answered"
    STATUS_CHANGED = "status_changed"


EVENT_KINDS = {
    NotificationEvent.TASK_ASSIGNED: NotificationKind.TASK_ASSIGNED,
    NotificationEvent.RECURRENCE_SPAWNED: NotificationKind.TASK_ASSIGNED,
    NotificationEvent.PROPOSAL_SUBMITTED: NotificationKind.TASK_UPDATED,
    NotificationEvent.PROPOSAL_ANSWERED: NotificationKind.PROPOSAL_RESPONSE,
    NotificationEvent.STATUS_CHANGED: NotificationKind.TASK_UPDATED,
}

TEMPLATES = {
    NotificationEvent.TASK_ASSIGNED: ("New task", "You have been assigned: {title}"),
    NotificationEvent.RECURRENCE_SPAWNED: (
        "New recurring task",
        "A new instance of a recurring task was created: {title}",
    ),
    NotificationEvent.PROPOSAL_SUBMITTED: (
        "New proposal",
        'An officer submitted a new proposal/opinion for "{title}".',
    ),
    NotificationEvent.PROPOSAL_ANSWERED: ("Proposal response", "{response} Task: {title}"),
    NotificationEvent.STATUS_CHANGED: (
        "Progress update",
        'An officer updated the progress of "{title}".',
    ),
}

RESPONSE_MESSAGES = {
    ResponseType.AGREE: "The manager AGREED with your proposal.",
    ResponseType.REJECT: "The manager REJECTED your proposal.",
    ResponseType.OTHER: "The manager gave other direction on your proposal.",
}


def build_notification(
    event: NotificationEvent,
    recipient_id: str,
    task: TaskEntity,
    *,
    notification_id: str,
    now: datetime,
) -> NotificationEntity:
    title, template = TEMPLATES[event]
    response = ""
    if event == NotificationEvent.PROPOSAL_ANSWERED and task.manager_response is not None:
        response = RESPONSE_MESSAGES[task.manager_response.type]
    return NotificationEntity(
        id=notification_id,
        user_id=recipient_id,
        title=title,
        message=template.format(title=task.title, response=response).strip(),
        type=EVENT_KINDS[event],
        created_at=now,
        is_read=False,
        task_id=task.id,
    )
