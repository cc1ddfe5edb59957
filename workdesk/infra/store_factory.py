from __future__ import annotations

import logging

from workdesk.config import Settings
from workdesk.domain.errors import StoreUnavailableError

from .cloud_config import load_cloud_config
from .db import create_db_engine, create_session_factory, init_db
from .remote_store import RemoteRecordStore
from .sql_store import SqlRecordStore
from .store import RecordStore

logger = logging.getLogger(__name__)


def open_local_store(settings: Settings) -> SqlRecordStore:
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    return SqlRecordStore(create_session_factory(engine))


def open_store(settings: Settings) -> RecordStore:
    """Return the remote store when one is configured and reachable, else the local one."""
    config = load_cloud_config(settings.cloud_config_path)
    if config is not None:
        remote = RemoteRecordStore(config, timeout=settings.remote_timeout)
        try:
            remote.connect()
            return remote
        except StoreUnavailableError:
            logger.warning("Remote store unavailable, falling back to local storage", exc_info=True)
            remote.close()
    return open_local_store(settings)
