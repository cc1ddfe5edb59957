"""Remote synchronized store over a Realtime Database REST endpoint.

Each collection lives at ``{database_url}/{collection}.json`` and is read
with GET and overwritten with PUT. Concurrent clients are last-writer-wins
per collection.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Sequence

import httpx

from workdesk.domain.entities import UserEntity
from workdesk.domain.errors import StoreUnavailableError
from workdesk.domain.records import (
    notification_from_record,
    notification_to_record,
    task_from_record,
    task_to_record,
    user_from_record,
    user_to_record,
)
from workdesk.services.clock import utcnow

from .cloud_config import CloudConfig
from .seed import default_dataset
from .store import Collection, Entity, find_login, hash_user_passwords

logger = logging.getLogger(__name__)

_CODECS: dict[Collection, tuple[Callable, Callable]] = {
    Collection.USERS: (user_from_record, user_to_record),
    Collection.TASKS: (task_from_record, task_to_record),
    Collection.NOTIFICATIONS: (notification_from_record, notification_to_record),
}


def _as_list(payload: Any) -> list:
    # The database returns arrays with sparse indexes as objects.
    if payload is None:
        return []
    if isinstance(payload, dict):
        return [payload[key] for key in sorted(payload, key=lambda k: int(k) if str(k).isdigit() else k)]
    return [item for item in payload if item is not None]


class RemoteRecordStore:
    def __init__(
        self,
        config: CloudConfig,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._config = config
        self._base_url = config.database_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._clock = clock

    def close(self) -> None:
        self._client.close()

    def connect(self) -> None:
        self._request("GET", "", params={"shallow": "true"})
        logger.info("Connected to remote store %s", self._base_url)

    def get_all(self, collection: Collection) -> list:
        from_record, _ = _CODECS[collection]
        payload = self._request("GET", collection.value)
        if payload is None:
            records = default_dataset(collection.value, self._clock())
            if collection == Collection.USERS:
                records = hash_user_passwords(records)
            logger.info("Seeding empty remote collection %s", collection.value)
            self.replace_all(collection, records)
            return records
        return [from_record(record) for record in _as_list(payload)]

    def replace_all(self, collection: Collection, records: Sequence[Entity]) -> None:
        _, to_record = _CODECS[collection]
        if collection == Collection.USERS:
            records = hash_user_passwords(records)
        self._request("PUT", collection.value, json=[to_record(record) for record in records])

    def login(self, username: str, password: str) -> UserEntity | None:
        return find_login(self.get_all(Collection.USERS), username, password)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}/{path}.json"
        params = dict(kwargs.pop("params", {}))
        if self._config.api_key:
            params["auth"] = self._config.api_key
        try:
            response = self._client.request(method, url, params=params, **kwargs)
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise StoreUnavailableError(f"Remote store {method} {path or '/'} failed: {exc}") from exc
