from __future__ import annotations

from dataclasses import replace

from workdesk.domain.entities import NotificationEntity
from workdesk.infra.store import Collection, RecordStore


class NotificationService:
    """Recipient-side access to notifications; only the read flag ever changes."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def list_for_user(self, user_id: str) -> list[NotificationEntity]:
        notifications = self._store.get_all(Collection.NOTIFICATIONS)
        own = [n for n in notifications if n.user_id == user_id]
        return sorted(own, key=lambda n: n.created_at, reverse=True)

    def unread_count(self, user_id: str) -> int:
        return sum(1 for n in self.list_for_user(user_id) if not n.is_read)

    def mark_read(self, notification_id: str) -> None:
        notifications = self._store.get_all(Collection.NOTIFICATIONS)
        if not any(n.id == notification_id for n in notifications):
            return
        self._store.replace_all(
            Collection.NOTIFICATIONS,
            [replace(n, is_read=True) if n.id == notification_id else n for n in notifications],
        )

    def mark_all_read(self, user_id: str) -> None:
        notifications = self._store.get_all(Collection.NOTIFICATIONS)
        self._store.replace_all(
            Collection.NOTIFICATIONS,
            [replace(n, is_read=True) if n.user_id == user_id else n for n in notifications],
        )
