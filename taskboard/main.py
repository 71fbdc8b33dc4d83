import logging
import time
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard.config import Settings, get_settings
from taskboard.errors import TaskNotFound, TaskValidationError
from taskboard.logging_setup import setup_logging
from taskboard.schema import (
    DeleteResponse,
    HealthResponse,
    Task,
    TaskCreate,
    TaskDelete,
    TaskUpdate,
)
from taskboard.store import TaskStore, seed_tasks

logger = logging.getLogger(__name__)

PROCESS_STARTED_AT = time.monotonic()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    loc = first.get("loc") or ()
    # Body positions (e.g. for malformed JSON) are ints, not field names.
    field = loc[-1] if loc and isinstance(loc[-1], str) else ""
    if field in ("name", "description") and first.get("type") in ("missing", "string_too_short"):
        return f"{field.capitalize()} is required"
    if field and field != "body":
        return f"{field}: {first['msg']}"
    return first["msg"]


def build_router(store: TaskStore) -> APIRouter:
    router = APIRouter()

    @router.get("/getAllTasks", response_model=list[Task])
    async def get_all_tasks():
        return store.list_all()

    @router.get("/getTaskById", response_model=Task)
    async def get_task_by_id(task_id: str = Query(alias="id")):
        try:
            return store.get_by_id(task_id)
        except TaskNotFound as e:
            logger.warning("%s", e.message)
            raise HTTPException(status_code=404, detail=e.message)

    @router.post("/addTask", response_model=Task)
    async def add_task(task: TaskCreate):
        try:
            return store.create(task.name, task.description, task.status)
        except TaskValidationError as e:
            logger.warning("Rejected task: %s", e.message)
            raise HTTPException(status_code=400, detail=e.message)

    @router.post("/updateTask", response_model=Task)
    async def update_task(task: TaskUpdate):
        try:
            return store.update(task.id, task.to_patch())
        except TaskNotFound as e:
            logger.warning("%s", e.message)
            raise HTTPException(status_code=404, detail=e.message)

    @router.post("/deleteTask", response_model=DeleteResponse)
    async def delete_task(task: TaskDelete):
        try:
            deleted = store.delete(task.id)
        except TaskNotFound as e:
            logger.warning("%s", e.message)
            raise HTTPException(status_code=404, detail=e.message)
        return DeleteResponse(
            success=True,
            message=f'Task "{deleted.name}" deleted successfully',
            deleted_task=deleted,
        )

    return router


def create_app(store: Optional[TaskStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = TaskStore(seed_tasks() if settings.seed_tasks else None)

    app = FastAPI(title="taskboard")
    app.state.store = store
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning("Invalid request to %s: %s", request.url.path, message)
        return JSONResponse(status_code=400, content={"detail": message})

    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            status="OK",
            uptime=time.monotonic() - PROCESS_STARTED_AT,
            environment=settings.environment,
        )

    app.include_router(build_router(store), prefix=settings.rpc_prefix)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Server is running on port %s", settings.port)
    logger.info("Environment: %s", settings.environment)
    logger.info("Health check: http://localhost:%s/api/health", settings.port)
    logger.info("RPC endpoint: http://localhost:%s%s", settings.port, settings.rpc_prefix)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
