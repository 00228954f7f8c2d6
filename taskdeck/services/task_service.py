from __future__ import annotations

import logging

from taskdeck.domain.entities import TaskEntity
from taskdeck.domain.errors import NotFoundError, ValidationError
from taskdeck.infra.models import TITLE_MAX_LENGTH
from taskdeck.infra.repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, repo: TaskRepository) -> None:
        self._repo = repo

    def list_tasks(self) -> list[TaskEntity]:
        return self._repo.list_tasks()

    def get_task(self, task_id: int) -> TaskEntity:
        task = self._repo.get_task(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def create_task(self, title: str, description: str | None = "", completed: bool = False) -> TaskEntity:
        data = {
            "title": self._clean_title(title),
            "description": self._clean_description(description),
            "completed": bool(completed),
        }
        task = self._repo.create_task(data)
        logger.info("Created task id=%s", task.id)
        return task

    def update_task(self, task_id: int, data: dict) -> TaskEntity:
        normalized = self._normalize_update(data)
        if not normalized:
            return self.get_task(task_id)

        task = self._repo.update_task(task_id, normalized)
        if task is None:
            logger.warning("Update of missing task id=%s", task_id)
            raise NotFoundError(task_id)
        logger.info("Updated task id=%s fields=%s", task_id, sorted(normalized))
        return task

    def toggle_task(self, task_id: int) -> TaskEntity:
        task = self._repo.toggle_task(task_id)
        if task is None:
            logger.warning("Toggle of missing task id=%s", task_id)
            raise NotFoundError(task_id)
        logger.info("Toggled task id=%s completed=%s", task_id, task.completed)
        return task

    def delete_task(self, task_id: int) -> None:
        if not self._repo.delete_task(task_id):
            logger.warning("Delete of missing task id=%s", task_id)
            raise NotFoundError(task_id)
        logger.info("Deleted task id=%s", task_id)

    def _normalize_update(self, data: dict) -> dict:
        normalized: dict = {}
        if data.get("title") is not None:
            normalized["title"] = self._clean_title(data["title"])
        if "description" in data:
            normalized["description"] = self._clean_description(data["description"])
        if data.get("completed") is not None:
            normalized["completed"] = bool(data["completed"])
        return normalized

    @staticmethod
    def _clean_title(title: str | None) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            logger.warning("Rejected blank task title")
            raise ValidationError("Title must not be empty")
        if len(cleaned) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        return cleaned

    @staticmethod
    def _clean_description(description: str | None) -> str:
        return description or ""
