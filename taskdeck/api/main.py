from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskdeck.config import Settings, get_settings
from taskdeck.domain.errors import NotFoundError, TaskError, ValidationError
from taskdeck.infra.db import init_db, make_engine, make_session_factory
from taskdeck.infra.logging import setup_logging
from taskdeck.infra.repository import TaskRepository
from taskdeck.services.task_service import TaskService

from .routes import router

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 422,
    NotFoundError: 404,
}


def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


async def handle_task_error(request: Request, exc: TaskError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status_code, content=_error_body(exc.code, str(exc)))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    logger.warning("Rejected malformed call to %s: %s", request.url.path, messages)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("BAD_REQUEST", "; ".join(messages)),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = make_engine(settings.database_url)
        init_db(engine)
        repo = TaskRepository(make_session_factory(engine))
        app.state.engine = engine
        app.state.service = TaskService(repo)
        logger.info("Task store ready total=%s", repo.count_tasks())
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Task store closed")

    app = FastAPI(title="taskdeck", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TaskError, handle_task_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.include_router(router)
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    setup_logging(settings, "taskdeck-server.log")
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
