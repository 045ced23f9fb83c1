"""Exception handlers that render schedule errors as JSON responses."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger
from app.domain.errors import OverlapConflict, ScheduleValidationError

log = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body: dict[str, Any] = {"message": exc.detail or "HTTP error"}
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(
        request: Request, exc: RequestValidationError
    ):
        body = {"message": "Validation error", "errors": jsonable_encoder(exc.errors())}
        return JSONResponse(status_code=422, content=body)

    @app.exception_handler(OverlapConflict)
    async def _overlap_handler(request: Request, exc: OverlapConflict):
        log.info(
            "schedule_overlap_rejected",
            path=request.url.path,
            conflicting_ids=exc.conflicting_ids,
        )
        body = {"message": str(exc), "conflictingIds": exc.conflicting_ids}
        return JSONResponse(status_code=409, content=body)

    @app.exception_handler(ScheduleValidationError)
    async def _schedule_validation_handler(
        request: Request, exc: ScheduleValidationError
    ):
        return JSONResponse(status_code=422, content={"message": str(exc)})
