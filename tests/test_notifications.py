from __future__ import annotations

from workdesk.domain.entities import ManagerResponse
from workdesk.domain.enums import NotificationKind, ResponseType
from workdesk.services.notifications import NotificationEvent, build_notification

from fakes import NOW, make_task


def _build(event: NotificationEvent, task=None):
    return build_notification(
        event, "u9", task or make_task(title="Budget review"), notification_id="n1", now=NOW
    )


def test_assignment_notification() -> None:
    notification = _build(NotificationEvent.TASK_ASSIGNED)

    assert notification.id == "n1"
    assert notification.user_id == "u9"
    assert notification.type == NotificationKind.TASK_ASSIGNED
    assert notification.message == "You have been assigned: Budget review"
    assert notification.task_id == "t1"
    assert notification.created_at == NOW
    assert not notification.is_read


def test_update_events_share_task_updated_kind() -> None:
    submitted = _build(NotificationEvent.PROPOSAL_SUBMITTED)
    progressed = _build(NotificationEvent.STATUS_CHANGED)

    assert submitted.type == progressed.type == NotificationKind.TASK_UPDATED
    assert "proposal" in submitted.message
    assert "progress" in progressed.message


def test_recurrence_notification_is_an_assignment() -> None:
    notification = _build(NotificationEvent.RECURRENCE_SPAWNED)

    assert notification.type == NotificationKind.TASK_ASSIGNED
    assert notification.title == "New recurring task"


def test_response_message_follows_response_type() -> None:
    expected = {
        ResponseType.AGREE: "AGREED",
        ResponseType.REJECT: "REJECTED",
        ResponseType.OTHER: "other direction",
    }
    for kind, fragment in expected.items():
        task = make_task(manager_response=ManagerResponse(type=kind, responded_at=NOW))
        notification = _build(NotificationEvent.PROPOSAL_ANSWERED, task)

        assert notification.type == NotificationKind.PROPOSAL_RESPONSE
        assert fragment in notification.message
        assert notification.message.endswith("Task: Quarterly report")
