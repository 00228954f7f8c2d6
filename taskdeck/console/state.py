from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from taskdeck.domain.entities import TaskEntity

logger = logging.getLogger(__name__)


class TaskClient(Protocol):
    def list_tasks(self) -> list[TaskEntity]: ...

    def create_task(self, title: str, description: str = "", completed: bool = False) -> TaskEntity: ...

    def update_task(
        self,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        completed: bool | None = None,
    ) -> TaskEntity: ...

    def toggle_task(self, task_id: int) -> TaskEntity: ...

    def delete_task(self, task_id: int) -> None: ...


@dataclass(frozen=True)
class Notice:
    message: str


@dataclass(frozen=True)
class TaskCounts:
    total: int
    completed: int

    @property
    def remaining(self) -> int:
        return self.total - self.completed

    @property
    def all_done(self) -> bool:
        return self.total > 0 and self.completed == self.total


@dataclass
class Draft:
    title: str = ""
    description: str = ""

    def clear(self) -> None:
        self.title = ""
        self.description = ""


class TaskConsole:
    """Local mirror of the task store plus the form and edit state of the console.

    The mirror is keyed by task id and only ever changes from store responses.
    Failed calls leave it untouched and publish a ``Notice`` instead.
    """

    def __init__(self, client: TaskClient) -> None:
        self._client = client
        self._tasks: dict[int, TaskEntity] = {}
        self._listeners: list[Callable[[], None]] = []
        self.form = Draft()
        self.edit = Draft()
        self.editing_id: int | None = None
        self.creating = False
        self.notice: Notice | None = None

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    @property
    def tasks(self) -> list[TaskEntity]:
        return list(self._tasks.values())

    def get(self, task_id: int) -> TaskEntity | None:
        return self._tasks.get(task_id)

    def counts(self) -> TaskCounts:
        completed = sum(1 for task in self._tasks.values() if task.completed)
        return TaskCounts(total=len(self._tasks), completed=completed)

    def can_submit(self) -> bool:
        return not self.creating and bool(self.form.title.strip())

    def dismiss_notice(self) -> None:
        self.notice = None
        self._notify()

    def load(self) -> bool:
        try:
            tasks = self._client.list_tasks()
        except Exception as exc:  # noqa: BLE001
            return self._fail("load tasks", exc)
        self._tasks = {task.id: task for task in tasks}
        if self.editing_id is not None and self.editing_id not in self._tasks:
            self._reset_edit()
        self._notify()
        return True

    def submit_create(self) -> bool:
        if not self.can_submit():
            return False

        self.creating = True
        self._notify()
        try:
            task = self._client.create_task(self.form.title, self.form.description, False)
        except Exception as exc:  # noqa: BLE001
            self.creating = False
            return self._fail("create task", exc)

        self.creating = False
        self._tasks[task.id] = task
        self.form.clear()
        self._notify()
        return True

    def toggle(self, task_id: int) -> bool:
        try:
            task = self._client.toggle_task(task_id)
        except Exception as exc:  # noqa: BLE001
            return self._fail(f"toggle task {task_id}", exc)
        self._reconcile(task)
        return True

    def start_edit(self, task_id: int) -> None:
        task = self._tasks.get(task_id)
        if task is None:
            return
        self.editing_id = task_id
        self.edit.title = task.title
        self.edit.description = task.description
        self._notify()

    def cancel_edit(self) -> None:
        self._reset_edit()
        self._notify()

    def save_edit(self) -> bool:
        task_id = self.editing_id
        if task_id is None or not self.edit.title.strip():
            return False
        try:
            task = self._client.update_task(
                task_id,
                title=self.edit.title,
                description=self.edit.description,
            )
        except Exception as exc:  # noqa: BLE001
            return self._fail(f"update task {task_id}", exc)

        if self.editing_id == task_id:
            self._reset_edit()
        self._reconcile(task)
        return True

    def delete(self, task_id: int) -> bool:
        try:
            self._client.delete_task(task_id)
        except Exception as exc:  # noqa: BLE001
            return self._fail(f"delete task {task_id}", exc)

        self._tasks.pop(task_id, None)
        if self.editing_id == task_id:
            self._reset_edit()
        self._notify()
        return True

    def _reconcile(self, task: TaskEntity) -> None:
        self._tasks[task.id] = task
        self._notify()

    def _reset_edit(self) -> None:
        self.editing_id = None
        self.edit.clear()

    def _fail(self, action: str, exc: Exception) -> bool:
        logger.warning("Failed to %s: %s", action, exc)
        self.notice = Notice(f"Failed to {action}: {exc}")
        self._notify()
        return False

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
