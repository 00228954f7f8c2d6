from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskdeck.api.main import create_app
from taskdeck.config import Settings


@pytest.fixture()
def client():
    app = create_app(Settings(database_url="sqlite://"))
    with TestClient(app) as test_client:
        yield test_client


def _create(client: TestClient, title: str = "Buy milk", **extra) -> dict:
    response = client.post("/rpc/createTask", json={"title": title, **extra})
    assert response.status_code == 200, response.text
    return response.json()


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/healthcheck")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_on_empty_store(client: TestClient) -> None:
    response = client.post("/rpc/listTasks")

    assert response.status_code == 200
    assert response.json() == []


def test_create_returns_full_task(client: TestClient) -> None:
    task = _create(client, description="", completed=False)

    assert task["id"] == 1
    assert task["title"] == "Buy milk"
    assert task["description"] == ""
    assert task["completed"] is False
    assert task["created_at"]


def test_create_with_null_description(client: TestClient) -> None:
    task = _create(client, description=None)

    assert task["description"] == ""


def test_create_blank_title_is_validation_error(client: TestClient) -> None:
    response = client.post("/rpc/createTask", json={"title": "   "})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert client.post("/rpc/listTasks").json() == []


def test_malformed_body_is_bad_request(client: TestClient) -> None:
    response = client.post("/rpc/toggleTask", json={"task": 1})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_partial_update_over_the_wire(client: TestClient) -> None:
    task = _create(client, description="semi-skimmed")

    response = client.post("/rpc/updateTask", json={"id": task["id"], "completed": True})

    assert response.status_code == 200
    updated = response.json()
    assert updated["completed"] is True
    assert updated["title"] == task["title"]
    assert updated["description"] == "semi-skimmed"
    assert updated["created_at"] == task["created_at"]


def test_update_missing_task_is_not_found(client: TestClient) -> None:
    response = client.post("/rpc/updateTask", json={"id": 5, "title": "nothing"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_scenario(client: TestClient) -> None:
    created = _create(client, description="", completed=False)
    assert created["id"] == 1

    toggled = client.post("/rpc/toggleTask", json={"id": 1}).json()
    assert toggled["completed"] is True

    updated = client.post("/rpc/updateTask", json={"id": 1, "title": "Buy oat milk"}).json()
    assert updated["title"] == "Buy oat milk"
    assert updated["completed"] is True

    deleted = client.post("/rpc/deleteTask", json={"id": 1})
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True}
    assert client.post("/rpc/listTasks").json() == []

    again = client.post("/rpc/deleteTask", json={"id": 1})
    assert again.status_code == 404
    assert again.json()["error"]["code"] == "NOT_FOUND"


def test_created_at_carries_utc_offset(client: TestClient) -> None:
    task = _create(client)

    assert task["created_at"].endswith("+00:00")


def test_toggle_missing_task_is_not_found(client: TestClient) -> None:
    response = client.post("/rpc/toggleTask", json={"id": 9})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_update_blank_title_is_validation_error(client: TestClient) -> None:
    task = _create(client)

    response = client.post("/rpc/updateTask", json={"id": task["id"], "title": "  "})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert client.post("/rpc/listTasks").json()[0]["title"] == "Buy milk"
