from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from taskdeck.domain.entities import TaskEntity
from taskdeck.domain.errors import NotFoundError, TaskError, ValidationError

logger = logging.getLogger(__name__)


class RpcError(TaskError):
    """A call failed for a reason other than a store-level error."""

    code = "RPC_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_task(data: dict) -> TaskEntity:
    try:
        return TaskEntity(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            completed=bool(data["completed"]),
            created_at=_parse_timestamp(data["created_at"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise RpcError(f"Malformed task in response: {data!r}") from exc


class TaskRpcClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def close(self) -> None:
        self._session.close()

    def list_tasks(self) -> list[TaskEntity]:
        payload = self._call("listTasks", {})
        if not isinstance(payload, list):
            raise RpcError("listTasks did not return a list")
        return [_parse_task(item) for item in payload]

    def create_task(self, title: str, description: str = "", completed: bool = False) -> TaskEntity:
        return _parse_task(
            self._call(
                "createTask",
                {"title": title, "description": description, "completed": completed},
            )
        )

    def update_task(
        self,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        completed: bool | None = None,
    ) -> TaskEntity:
        body: dict[str, Any] = {"id": task_id}
        if title is not None:
            body["title"] = title
        if description is not None:
            body["description"] = description
        if completed is not None:
            body["completed"] = completed
        return _parse_task(self._call("updateTask", body))

    def toggle_task(self, task_id: int) -> TaskEntity:
        return _parse_task(self._call("toggleTask", {"id": task_id}))

    def delete_task(self, task_id: int) -> None:
        payload = self._call("deleteTask", {"id": task_id})
        if not isinstance(payload, dict) or not payload.get("success"):
            raise RpcError(f"deleteTask did not confirm removal of task {task_id}")

    def _call(self, procedure: str, body: dict) -> Any:
        url = f"{self._base_url}/rpc/{procedure}"
        try:
            response = self._session.post(url, json=body, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("Call %s failed: %s", procedure, exc)
            raise RpcError(f"{procedure} failed: {exc}") from exc

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as exc:
                raise RpcError(f"{procedure} returned invalid JSON", response.status_code) from exc

        raise self._error_from_response(procedure, body, response)

    @staticmethod
    def _error_from_response(procedure: str, body: dict, response: requests.Response) -> TaskError:
        try:
            error = response.json().get("error")
        except (ValueError, AttributeError):
            error = None
        if not isinstance(error, dict):
            error = {}
        code = error.get("code")
        message = error.get("message") or f"{procedure} failed with HTTP {response.status_code}"

        if code == NotFoundError.code:
            return NotFoundError(body.get("id"))
        if code == ValidationError.code:
            return ValidationError(message)
        return RpcError(message, response.status_code)
