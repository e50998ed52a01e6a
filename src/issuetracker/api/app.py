"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from issuetracker import __version__
from issuetracker.api.dependencies import close_database, init_database
from issuetracker.api.models import MessageResponse
from issuetracker.api.routes import health, issues
from issuetracker.config import Settings
from issuetracker.logging import sanitize_for_log
from issuetracker.service import IssueNotFoundError, ValidationError
from issuetracker.store import IssueStoreError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import Response

logger = logging.getLogger("issuetracker.api")

# Generic messages per verb; store details never reach the caller
_FAILURES: dict[str, tuple[int, str]] = {
    "GET": (status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch issues"),
    "POST": (status.HTTP_400_BAD_REQUEST, "Failed to create issue"),
    "PUT": (status.HTTP_400_BAD_REQUEST, "Failed to update issue"),
    "DELETE": (status.HTTP_400_BAD_REQUEST, "Failed to delete issue"),
}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc)
        parts.append(f"{field}: {err['msg']}" if field else str(err["msg"]))
    return "; ".join(parts) or "Invalid request"


def failure_response(request: Request) -> JSONResponse:
    """Generic failure body for the request's verb: 500 for reads, 400 for writes."""
    status_code, message = _FAILURES.get(
        request.method, (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    )
    if request.method == "GET" and "issue_id" in request.path_params:
        message = "Failed to fetch issue"
    return _message(status_code, message)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate service and store errors into JSON ``{"message": ...}`` bodies.

    Call before adding CORS so error responses carry CORS headers too.
    """

    @app.exception_handler(IssueNotFoundError)
    async def issue_not_found_handler(_request: Request, _exc: IssueNotFoundError) -> JSONResponse:
        return _message(status.HTTP_404_NOT_FOUND, "Issue not found")

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return _message(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _message(status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc))

    @app.exception_handler(IssueStoreError)
    async def store_error_handler(request: Request, exc: IssueStoreError) -> JSONResponse:
        logger.error(
            "Store error on %s %s: %s",
            request.method,
            request.url.path,
            sanitize_for_log(str(exc)),
            exc_info=exc,
        )
        return failure_response(request)

    # Must sit inside CORSMiddleware; an Exception handler would run outside it
    @app.middleware("http")
    async def unexpected_error_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
            )
            return failure_response(request)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    database_url = app.state.database_url
    logger.info("Opening issue store at %s", sanitize_for_log(database_url))
    init_database(database_url)
    yield
    close_database()
    logger.info("Issue store closed")


def create_app(database_url: str | None = None, settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings.from_env()
    if database_url is not None:
        settings.database_url = database_url

    app = FastAPI(
        title="Issue Tracker API",
        description="REST API for creating, reading, updating and deleting issues",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.database_url = settings.database_url
    app.state.settings = settings

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    app.include_router(health.router)
    app.include_router(issues.router, prefix="/api")

    return app


# Default app instance
app = create_app()
