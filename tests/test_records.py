from __future__ import annotations

from datetime import datetime, timezone

from workdesk.domain.enums import RecurrenceKind, ResponseType
from workdesk.domain.records import notification_from_record, task_from_record, user_from_record


def test_task_record_from_shared_dataset() -> None:
    record = {
        "id": "t1",
        "title": "Review zoning plan",
        "description": "Report back before the 25th.",
        "proposal": "Requesting a 2 day extension.",
        "managerResponse": {"type": "AGREE", "content": "ok", "respondedAt": 1715330000000},
        "assigneeId": "u4",
        "creatorId": "u1",
        "status": "IN_PROGRESS",
        "priority": "HIGH",
        "dueDate": "2024-05-20T17:00:00.000Z",
        "createdAt": 1715300000000,
        "aiSuggestedSteps": ["Collect files"],
    }

    task = task_from_record(record)

    assert task.recurring == RecurrenceKind.NONE
    assert task.is_proposal_read is False
    assert task.due_date == datetime(2024, 5, 20, 17, 0, tzinfo=timezone.utc)
    assert task.manager_response.type == ResponseType.AGREE
    assert task.manager_response.responded_at == datetime.fromtimestamp(1715330000, tz=timezone.utc)
    assert task.suggested_steps == ("Collect files",)


def test_user_and_notification_records_tolerate_missing_optionals() -> None:
    user = user_from_record({"id": "u9", "username": "x", "fullName": "X", "role": "MANAGER"})
    note = notification_from_record(
        {"id": "n1", "userId": "u9", "title": "t", "message": "m", "createdAt": 0, "type": "SYSTEM"}
    )

    assert user.is_manager and user.avatar_url is None and user.password == ""
    assert note.task_id is None and note.is_read is False
