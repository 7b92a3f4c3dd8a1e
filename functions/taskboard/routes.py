"""
HTTP routes for the taskboard API.

Routes are declared as an ordered table of (method, path, handler, response
model) entries. Starlette matches them first-to-last, and the trailing
catch-all turns everything unmatched into a plain 404.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from taskboard.db import DbClient
from taskboard.dependencies import get_db_client, get_summarizer, get_theme_store
from taskboard.kv import ThemeStore
from taskboard.schemas import (
    CreateTaskRequest,
    SetThemeRequest,
    SuccessResponse,
    SummarizeRequest,
    SummarizeResponse,
    TaskResponse,
    ThemeResponse,
    UpdateTaskRequest,
    UpdatedTaskResponse,
)
from taskboard.summarizer import Summarizer

logger = logging.getLogger(__name__)

CATCH_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def get_theme(themes: ThemeStore = Depends(get_theme_store)):
    return ThemeResponse(theme=themes.get_theme())


def set_theme(
    payload: SetThemeRequest, themes: ThemeStore = Depends(get_theme_store)
):
    themes.set_theme(payload.theme)
    return SuccessResponse()


def summarize(
    payload: SummarizeRequest, summarizer: Summarizer = Depends(get_summarizer)
):
    return SummarizeResponse(summary=summarizer.summarize(payload.text or ""))


def list_tasks(db: DbClient = Depends(get_db_client)):
    return [task.as_dict() for task in db.list_tasks()]


def create_task(payload: CreateTaskRequest, db: DbClient = Depends(get_db_client)):
    task = db.create_task(payload.title)
    logger.info("Created task %s", task.id)
    return TaskResponse(**task.as_dict())


def _task_id(rest: str) -> str:
    """Task routes match on the /tasks/ prefix; the id is the first segment after it."""
    return rest.split("/")[0]


def update_task(
    rest: str, payload: UpdateTaskRequest, db: DbClient = Depends(get_db_client)
):
    """
    Overwrite title and completed. Unknown ids are not an error and the
    response echoes the request rather than re-reading the row.
    """
    return UpdatedTaskResponse(
        **db.update_task(_task_id(rest), payload.title, payload.completed)
    )


def delete_task(rest: str, db: DbClient = Depends(get_db_client)):
    db.delete_task(_task_id(rest))
    return SuccessResponse()


def not_found(rest: str):
    return PlainTextResponse("Not Found", status_code=404)


ROUTES = [
    ("GET", "/theme", get_theme, ThemeResponse),
    ("POST", "/theme", set_theme, SuccessResponse),
    ("POST", "/summarize", summarize, SummarizeResponse),
    ("GET", "/tasks", list_tasks, list[TaskResponse]),
    ("POST", "/tasks", create_task, TaskResponse),
    ("PUT", "/tasks/{rest:path}", update_task, UpdatedTaskResponse),
    ("DELETE", "/tasks/{rest:path}", delete_task, SuccessResponse),
]


def build_router() -> APIRouter:
    router = APIRouter()
    for method, path, endpoint, response_model in ROUTES:
        router.add_api_route(
            path, endpoint, methods=[method], response_model=response_model
        )
    router.add_api_route(
        "/{rest:path}",
        not_found,
        methods=CATCH_ALL_METHODS,
        include_in_schema=False,
    )
    return router


router = build_router()
