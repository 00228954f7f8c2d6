from __future__ import annotations

import threading
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from taskdeck.domain.entities import TaskEntity

from .models import TaskModel, utcnow

UPDATABLE_FIELDS = ("title", "description", "completed")


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        title=model.title,
        description=model.description,
        completed=model.completed,
        created_at=model.created_at,
    )


class TaskRepository:
    """Owns the task table. Every method runs in its own session and transaction.

    Writes are serialized with a lock so read-modify-write operations such as
    toggle never interleave inside one process.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._write_lock = threading.Lock()

    def list_tasks(self) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel).order_by(TaskModel.id.asc())
            return [_to_entity(task) for task in session.scalars(stmt)]

    def get_task(self, task_id: int) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            return _to_entity(task) if task else None

    def count_tasks(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(TaskModel)) or 0

    def create_task(self, data: dict) -> TaskEntity:
        with self._write_lock, self._session_factory() as session:
            latest = session.scalar(select(func.max(TaskModel.created_at)))
            now = utcnow()
            task = TaskModel(
                title=data["title"],
                description=data.get("description", ""),
                completed=bool(data.get("completed", False)),
                created_at=max(now, latest) if latest else now,
            )
            session.add(task)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def update_task(self, task_id: int, data: dict) -> Optional[TaskEntity]:
        with self._write_lock, self._session_factory() as session:
            task = session.get(TaskModel, task_id, with_for_update=True)
            if not task:
                return None
            for key, value in data.items():
                if key in UPDATABLE_FIELDS:
                    setattr(task, key, value)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def toggle_task(self, task_id: int) -> Optional[TaskEntity]:
        with self._write_lock, self._session_factory() as session:
            task = session.get(TaskModel, task_id, with_for_update=True)
            if not task:
                return None
            task.completed = not task.completed
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def delete_task(self, task_id: int) -> bool:
        with self._write_lock, self._session_factory() as session:
            task = session.get(TaskModel, task_id)
            if not task:
                return False
            session.delete(task)
            session.commit()
            return True
