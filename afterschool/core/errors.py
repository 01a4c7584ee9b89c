"""
Error taxonomy for the lessons API.

Every error a route can answer with is an ``ApiError``; the handlers
registered by ``register_error_handlers`` turn them (and framework errors)
into the ``{"error": ..., "message": ...}`` JSON envelope.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

KNOWN_ROUTES = [
    "GET /",
    "GET /lessons",
    "GET /search",
    "POST /orders",
    "PUT /lessons/:id",
    "GET /orders",
]

IMAGES_PREFIX = "/images"


class ApiError(Exception):
    """Base for errors that map onto a JSON error envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error: str, message: str) -> None:
        self.error = error
        self.message = message
        super().__init__(f"{error}: {message}")

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ClientError(ApiError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidIdentifier(ClientError):
    """A document key that cannot be parsed."""


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class RouteNotFound(NotFound):
    def __init__(self, method: str, path: str) -> None:
        super().__init__("Route not found", f"The route {method} {path} does not exist")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["availableRoutes"] = list(KNOWN_ROUTES)
        return payload


class StoreError(ApiError):
    """Connectivity or query failure in the data store."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def store_errors(title: str) -> Iterator[None]:
    """Re-raise any SQLAlchemy failure inside the block as a ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{title}: {e}")
        raise StoreError(title, str(e)) from e


def _envelope(exc: ApiError) -> JSONResponse:
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _envelope(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        path = request.url.path
        if exc.status_code == status.HTTP_404_NOT_FOUND and path.startswith(IMAGES_PREFIX + "/"):
            image = path[len(IMAGES_PREFIX):]
            logger.error(f"Image not found: {image}")
            return JSONResponse(
                {
                    "error": "Image not found",
                    "message": f"The requested image {image} does not exist",
                },
                status_code=status.HTTP_404_NOT_FOUND,
            )

        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            logger.info(f"Route not found: {request.method} {path}")
            return _envelope(RouteNotFound(request.method, path))

        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            {"error": detail, "message": detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = jsonable_encoder(exc.errors())
        fields = [".".join(str(p) for p in e.get("loc", ()) if p != "body") for e in errors]
        fields = [f for f in fields if f]
        message = "Request body failed validation"
        if fields:
            message += f" at: {', '.join(fields)}"
        return JSONResponse(
            {"error": "Invalid request body", "message": message, "details": errors},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            {"error": "Internal server error", "message": "Something went wrong on the server"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
