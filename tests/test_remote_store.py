from __future__ import annotations

import json
from dataclasses import replace
from datetime import datetime, timezone

import httpx
import pytest

from workdesk.domain.entities import ManagerResponse
from workdesk.domain.enums import NotificationKind, ResponseType
from workdesk.domain.errors import StoreUnavailableError
from workdesk.domain.records import task_to_record
from workdesk.infra.cloud_config import CloudConfig
from workdesk.infra.remote_store import RemoteRecordStore
from workdesk.infra.seed import DEFAULT_PASSWORD
from workdesk.infra.store import Collection
from workdesk.services.task_service import TaskService

from fakes import NOW, FixedClock, SequentialIds, make_task

CONFIG = CloudConfig(
    api_key="key-1",
    auth_domain="demo.example.com",
    database_url="https://demo.example.com/",
    project_id="demo",
)


class FakeDatabase:
    def __init__(self) -> None:
        self.data: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.url.path.strip("/").removesuffix(".json")
        if request.method == "PUT":
            self.data[key] = json.loads(request.content)
            return httpx.Response(200, json=self.data[key])
        if key == "":
            return httpx.Response(200, json={name: True for name in self.data})
        return httpx.Response(200, content=json.dumps(self.data.get(key)).encode())


@pytest.fixture()
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def remote(database) -> RemoteRecordStore:
    client = httpx.Client(transport=httpx.MockTransport(database.handler))
    return RemoteRecordStore(CONFIG, client=client, clock=lambda: NOW)


def test_empty_remote_collection_is_seeded(remote, database) -> None:
    tasks = remote.get_all(Collection.TASKS)

    assert [t.id for t in tasks] == ["t1", "t2"]
    assert [r["id"] for r in database.data["tasks"]] == ["t1", "t2"]
    assert database.requests[-1].method == "PUT"
    assert database.requests[-1].url.params["auth"] == "key-1"


def test_replace_all_writes_record_shape(remote, database) -> None:
    task = make_task("t7", proposal="Extend?")

    remote.replace_all(Collection.TASKS, [task])

    assert database.data["tasks"] == [task_to_record(task)]
    assert remote.get_all(Collection.TASKS) == [task]


def test_sparse_object_payload_is_read_in_index_order(remote, database) -> None:
    first, second = make_task("t1"), make_task("t2")
    database.data["tasks"] = {"1": task_to_record(second), "0": task_to_record(first)}

    assert [t.id for t in remote.get_all(Collection.TASKS)] == ["t1", "t2"]


def test_login_against_seeded_users(remote) -> None:
    assert remote.login("sbrooks", DEFAULT_PASSWORD).full_name == "Sam Brooks"
    assert remote.login("sbrooks", "nope") is None


def test_connect_probes_root(remote, database) -> None:
    remote.connect()

    assert database.requests[0].url.params["shallow"] == "true"


def test_http_errors_become_store_unavailable() -> None:
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(401)))
    store = RemoteRecordStore(CONFIG, client=client)

    with pytest.raises(StoreUnavailableError):
        store.connect()
    with pytest.raises(StoreUnavailableError):
        store.replace_all(Collection.TASKS, [])


def test_transport_errors_become_store_unavailable() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    store = RemoteRecordStore(CONFIG, client=httpx.Client(transport=httpx.MockTransport(refuse)))

    with pytest.raises(StoreUnavailableError):
        store.get_all(Collection.USERS)


def test_empty_body_is_treated_as_missing_collection() -> None:
    database = FakeDatabase()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            database.requests.append(request)
            return httpx.Response(200)
        return database.handler(request)

    store = RemoteRecordStore(CONFIG, client=httpx.Client(transport=httpx.MockTransport(handler)), clock=lambda: NOW)

    assert [n.id for n in store.get_all(Collection.NOTIFICATIONS)] == ["n1", "n2"]
    assert "notifications" in database.data


def test_resaving_answered_task_keeps_one_response_event(remote) -> None:
    remote.replace_all(Collection.TASKS, [])
    remote.replace_all(Collection.NOTIFICATIONS, [])
    service = TaskService(remote, clock=FixedClock(), ids=SequentialIds())
    task = make_task("t9", proposal="Extend the deadline?")
    remote.replace_all(Collection.TASKS, [task])
    answered = replace(
        task,
        manager_response=ManagerResponse(
            type=ResponseType.AGREE,
            content="ok",
            responded_at=datetime(2024, 5, 9, 8, 0, 0, 123456, tzinfo=timezone.utc),
        ),
    )

    service.save_task(answered)
    service.save_task(replace(answered, description="Edited directive"))

    kinds = [n.type for n in remote.get_all(Collection.NOTIFICATIONS)]
    assert kinds == [NotificationKind.PROPOSAL_RESPONSE]
