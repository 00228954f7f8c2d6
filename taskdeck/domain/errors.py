from __future__ import annotations


class TaskError(Exception):
    """Base class for failures reported by the task store."""

    code = "TASK_ERROR"


class ValidationError(TaskError):
    code = "VALIDATION_ERROR"


class NotFoundError(TaskError):
    code = "NOT_FOUND"

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
