from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)

_JSON_KEYS = {
    "api_key": "apiKey",
    "auth_domain": "authDomain",
    "database_url": "databaseURL",
    "project_id": "projectId",
    "storage_bucket": "storageBucket",
    "messaging_sender_id": "messagingSenderId",
    "app_id": "appId",
}


@dataclass(frozen=True)
class CloudConfig:
    """Connection parameters for the remote synchronized store.

    The values are opaque here; they are valid when the store connects.
    """

    api_key: str
    auth_domain: str
    database_url: str
    project_id: str
    storage_bucket: str = ""
    messaging_sender_id: str = ""
    app_id: str = ""

    def to_json(self) -> dict[str, str]:
        return {_JSON_KEYS[key]: value for key, value in asdict(self).items()}

    @classmethod
    def from_json(cls, data: dict) -> "CloudConfig":
        values = {}
        for item in fields(cls):
            raw = data.get(_JSON_KEYS[item.name], data.get(item.name, ""))
            values[item.name] = str(raw or "").strip()
        return cls(**values)


def load_cloud_config(path: Path) -> CloudConfig | None:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Ignoring unreadable cloud config at %s", path, exc_info=True)
        return None
    config = CloudConfig.from_json(data)
    if not config.database_url:
        logger.warning("Cloud config at %s has no database URL", path)
        return None
    return config


def save_cloud_config(path: Path, config: CloudConfig) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_json(), indent=2), encoding="utf-8")


def clear_cloud_config(path: Path) -> None:
    path.unlink(missing_ok=True)
