"""
FastAPI application entry point for the taskboard service.

Requests under the API prefix go to the JSON router; everything else is looked
up in the static asset store with a fallback to the SPA entry document.
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response

from taskboard.assets import SPA_ENTRY_PATH, AssetStore
from taskboard.config import get_settings
from taskboard.dependencies import get_asset_store
from taskboard.routes import CATCH_ALL_METHODS, router

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _server_error() -> PlainTextResponse:
    return PlainTextResponse("Internal Server Error", status_code=500)


def serve_asset(
    asset_path: str, assets: AssetStore | None = Depends(get_asset_store)
):
    if assets is None:
        return PlainTextResponse("Assets not configured", status_code=500)

    asset = assets.fetch(f"/{asset_path}")
    if asset is None:
        asset = assets.fetch(SPA_ENTRY_PATH)
    if asset is None:
        return PlainTextResponse("Not Found", status_code=404)
    return Response(content=asset.body, media_type=asset.media_type)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Taskboard Backend (FastAPI)", version="0.1.0")
    api_root = settings.api_prefix.rstrip("/") + "/"

    @app.middleware("http")
    async def api_edge(request: Request, call_next):
        if not request.url.path.startswith(api_root):
            return await call_next(request)
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error on %s %s", request.method, request.url.path
            )
            response = _server_error()
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.warning(
            "Rejected body on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return _server_error()

    app.include_router(router, prefix=settings.api_prefix)
    app.add_api_route(
        "/{asset_path:path}",
        serve_asset,
        methods=[*CATCH_ALL_METHODS, "OPTIONS"],
        include_in_schema=False,
    )
    return app


app = create_app()
