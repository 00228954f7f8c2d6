from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TaskEntity:
    id: int
    title: str
    description: str
    completed: bool
    created_at: datetime
