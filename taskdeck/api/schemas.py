from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from taskdeck.domain.entities import TaskEntity


class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    completed: bool
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        # stored as naive UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()

    @classmethod
    def from_entity(cls, task: TaskEntity) -> TaskOut:
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_at=task.created_at,
        )


class CreateTaskIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: Optional[str] = ""
    completed: bool = False


class UpdateTaskIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None


class TaskIdIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int


class SuccessOut(BaseModel):
    success: bool = True
