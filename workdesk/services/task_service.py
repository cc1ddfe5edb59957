from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime

from workdesk.domain.entities import NotificationEntity, TaskEntity, UserEntity
from workdesk.domain.enums import RecurrenceKind, TaskStatus
from workdesk.domain.errors import PermissionDeniedError
from workdesk.domain.filters import TaskFilters, apply_filters
from workdesk.domain.records import to_millis
from workdesk.infra.store import Collection, RecordStore

from .clock import Clock, IdGenerator, SystemClock
from .notifications import NotificationEvent, build_notification
from .recurrence import spawn_next

logger = logging.getLogger(__name__)

OFFICER_WRITABLE_FIELDS = frozenset({"status", "proposal", "is_proposal_read"})


class TaskService:
    """Task lifecycle: saves, deletes, recurrence and the notifications they cause.

    Every write reads the whole task collection, changes it in memory and
    replaces it in the store. Notifications are appended only after the
    task write succeeded.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Clock | None = None,
        ids: IdGenerator | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or SystemClock()
        self._ids = ids or IdGenerator()

    def list_tasks(
        self,
        filters: TaskFilters | None = None,
        viewer: UserEntity | None = None,
        now: datetime | None = None,
    ) -> list[TaskEntity]:
        tasks = self._store.get_all(Collection.TASKS)
        return apply_filters(tasks, filters or TaskFilters(), now or self._clock.now(), viewer)

    def get_task(self, task_id: str) -> TaskEntity | None:
        return next((t for t in self._store.get_all(Collection.TASKS) if t.id == task_id), None)

    def save_task(self, task: TaskEntity, actor: UserEntity | None = None) -> TaskEntity:
        tasks: list[TaskEntity] = list(self._store.get_all(Collection.TASKS))
        existing = next((t for t in tasks if t.id == task.id), None)

        if actor is not None:
            self._check_permissions(actor, existing, task)
            task = self._normalize_proposal_read(actor, existing, task)

        now = self._clock.now()
        pending: list[NotificationEntity] = []

        if existing is None:
            tasks.insert(0, task)
            pending.append(self._notify(NotificationEvent.TASK_ASSIGNED, task.assignee_id, task, now))
        else:
            pending.extend(self._update_events(existing, task, now))
            tasks[tasks.index(existing)] = task

        if self._completes_recurring(existing, task):
            spawned = spawn_next(task, new_id=self._ids.new_id("t"), now=now)
            tasks.insert(0, spawned)
            pending.insert(0, self._notify(NotificationEvent.RECURRENCE_SPAWNED, task.assignee_id, spawned, now))
            logger.info("Spawned recurring task %s from %s due %s", spawned.id, task.id, spawned.due_date)

        self._store.replace_all(Collection.TASKS, tasks)
        self._append_notifications(pending)
        return task

    def delete_task(self, task_id: str) -> None:
        tasks = self._store.get_all(Collection.TASKS)
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            logger.debug("Delete of unknown task %s", task_id)
        self._store.replace_all(Collection.TASKS, remaining)

    def mark_proposal_viewed(self, task: TaskEntity, actor: UserEntity | None = None) -> TaskEntity:
        return self.save_task(replace(task, is_proposal_read=True), actor)

    @staticmethod
    def _completes_recurring(existing: TaskEntity | None, task: TaskEntity) -> bool:
        return (
            existing is not None
            and existing.status != TaskStatus.COMPLETED
            and task.status == TaskStatus.COMPLETED
            and task.recurring != RecurrenceKind.NONE
        )

    def _update_events(self, existing: TaskEntity, task: TaskEntity, now: datetime) -> list[NotificationEntity]:
        events = []
        response = task.manager_response
        if response is not None and (
            existing.manager_response is None
            or to_millis(existing.manager_response.responded_at) != to_millis(response.responded_at)
        ):
            events.append(self._notify(NotificationEvent.PROPOSAL_ANSWERED, task.assignee_id, task, now))

        if task.assignee_id != task.creator_id:
            new_proposal = task.proposal or ""
            proposal_changed = new_proposal != (existing.proposal or "") and new_proposal.strip() != ""
            if proposal_changed:
                events.append(self._notify(NotificationEvent.PROPOSAL_SUBMITTED, task.creator_id, task, now))
            elif task.status != existing.status:
                events.append(self._notify(NotificationEvent.STATUS_CHANGED, task.creator_id, task, now))
        return events

    def _notify(
        self, event: NotificationEvent, recipient_id: str, task: TaskEntity, now: datetime
    ) -> NotificationEntity:
        return build_notification(
            event, recipient_id, task, notification_id=self._ids.new_id("n"), now=now
        )

    def _append_notifications(self, pending: list[NotificationEntity]) -> None:
        if not pending:
            return
        notifications = list(self._store.get_all(Collection.NOTIFICATIONS))
        notifications.extend(pending)
        self._store.replace_all(Collection.NOTIFICATIONS, notifications)
        for notification in pending:
            logger.debug(
                "Notified %s (%s) about task %s",
                notification.user_id,
                notification.type.value,
                notification.task_id,
            )

    @staticmethod
    def _check_permissions(actor: UserEntity, existing: TaskEntity | None, task: TaskEntity) -> None:
        if actor.is_manager:
            return
        if existing is None:
            raise PermissionDeniedError("Only managers can create tasks.")
        if existing.assignee_id != actor.id:
            raise PermissionDeniedError("Only the assignee can update this task.")
        changed = tuple(
            item.name
            for item in fields(TaskEntity)
            if item.name not in OFFICER_WRITABLE_FIELDS
            and getattr(existing, item.name) != getattr(task, item.name)
        )
        if changed:
            raise PermissionDeniedError(
                f"Officers cannot change: {', '.join(changed)}", fields=changed
            )

    @staticmethod
    def _normalize_proposal_read(
        actor: UserEntity, existing: TaskEntity | None, task: TaskEntity
    ) -> TaskEntity:
        if actor.is_manager:
            if task.has_proposal:
                return replace(task, is_proposal_read=True)
            return task
        old_proposal = existing.proposal if existing else None
        if (task.proposal or "") != (old_proposal or ""):
            return replace(task, is_proposal_read=False)
        return replace(task, is_proposal_read=existing.is_proposal_read if existing else False)
