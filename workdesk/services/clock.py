from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Protocol


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return utcnow()


class IdGenerator:
    """Unique record ids; the prefix tells users, tasks and notifications apart."""

    def new_id(self, prefix: str = "") -> str:
        return f"{prefix}{uuid.uuid4().hex}"
