from __future__ import annotations

from datetime import timedelta

import pytest

from taskdeck.infra import repository as repository_module
from taskdeck.infra.db import init_db, make_engine, make_session_factory
from taskdeck.infra.repository import TaskRepository
from taskdeck.services.task_service import TaskService


@pytest.fixture()
def repo():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield TaskRepository(make_session_factory(engine))
    engine.dispose()


def test_empty_store_lists_nothing(repo: TaskRepository) -> None:
    assert repo.list_tasks() == []
    assert repo.count_tasks() == 0


def test_list_keeps_insertion_order(repo: TaskRepository) -> None:
    titles = ["first", "second", "third"]
    for title in titles:
        repo.create_task({"title": title})

    tasks = repo.list_tasks()

    assert [task.title for task in tasks] == titles
    assert [task.id for task in tasks] == sorted(task.id for task in tasks)
    assert len({task.id for task in tasks}) == 3


def test_created_at_never_changes(repo: TaskRepository) -> None:
    task = repo.create_task({"title": "Buy milk"})

    repo.update_task(task.id, {"title": "Buy oat milk", "description": "2 litres"})
    repo.toggle_task(task.id)

    assert repo.get_task(task.id).created_at == task.created_at


def test_created_at_does_not_go_backwards(repo: TaskRepository, monkeypatch: pytest.MonkeyPatch) -> None:
    first = repo.create_task({"title": "first"})
    earlier = first.created_at - timedelta(hours=1)
    monkeypatch.setattr(repository_module, "utcnow", lambda: earlier)

    second = repo.create_task({"title": "second"})

    assert second.id > first.id
    assert second.created_at >= first.created_at


def test_ids_are_not_reused_after_delete(repo: TaskRepository) -> None:
    repo.create_task({"title": "first"})
    last = repo.create_task({"title": "second"})

    assert repo.delete_task(last.id) is True
    replacement = repo.create_task({"title": "third"})

    assert replacement.id > last.id


def test_update_ignores_unknown_fields(repo: TaskRepository) -> None:
    task = repo.create_task({"title": "Buy milk"})

    updated = repo.update_task(task.id, {"id": 99, "created_at": None, "completed": True})

    assert updated.id == task.id
    assert updated.created_at == task.created_at
    assert updated.completed is True


def test_missing_rows_are_reported(repo: TaskRepository) -> None:
    assert repo.get_task(1) is None
    assert repo.update_task(1, {"title": "x"}) is None
    assert repo.toggle_task(1) is None
    assert repo.delete_task(1) is False


def test_scenario_through_service(repo: TaskRepository) -> None:
    service = TaskService(repo)

    created = service.create_task("Buy milk", "", False)
    assert (created.id, created.title, created.completed) == (1, "Buy milk", False)

    toggled = service.toggle_task(1)
    assert (toggled.id, toggled.completed) == (1, True)

    updated = service.update_task(1, {"title": "Buy oat milk"})
    assert (updated.id, updated.title, updated.completed) == (1, "Buy oat milk", True)

    service.delete_task(1)
    assert service.list_tasks() == []
