from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from taskdeck.infra.db import ping
from taskdeck.services.task_service import TaskService

from .schemas import CreateTaskIn, SuccessOut, TaskIdIn, TaskOut, UpdateTaskIn

router = APIRouter()


def get_service(request: Request) -> TaskService:
    return request.app.state.service


@router.get("/healthcheck")
def healthcheck(request: Request) -> dict:
    ping(request.app.state.engine)
    return {"status": "ok"}


@router.post("/rpc/listTasks", response_model=List[TaskOut])
def list_tasks(service: TaskService = Depends(get_service)):
    return [TaskOut.from_entity(task) for task in service.list_tasks()]


@router.post("/rpc/createTask", response_model=TaskOut)
def create_task(payload: CreateTaskIn, service: TaskService = Depends(get_service)):
    task = service.create_task(payload.title, payload.description, payload.completed)
    return TaskOut.from_entity(task)


@router.post("/rpc/updateTask", response_model=TaskOut)
def update_task(payload: UpdateTaskIn, service: TaskService = Depends(get_service)):
    fields = payload.model_dump(exclude_unset=True, exclude={"id"})
    task = service.update_task(payload.id, fields)
    return TaskOut.from_entity(task)


@router.post("/rpc/toggleTask", response_model=TaskOut)
def toggle_task(payload: TaskIdIn, service: TaskService = Depends(get_service)):
    return TaskOut.from_entity(service.toggle_task(payload.id))


@router.post("/rpc/deleteTask", response_model=SuccessOut)
def delete_task(payload: TaskIdIn, service: TaskService = Depends(get_service)):
    service.delete_task(payload.id)
    return SuccessOut()
