"""
Typed business errors and their translation to HTTP responses.

Services raise these; the API layer never builds error bodies by hand.
"""

from typing import List, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .logging import get_logger

logger = get_logger("exceptions")


class NoteFeedError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(NoteFeedError):
    """Malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(NoteFeedError):
    """Missing or invalid credentials or token."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(NoteFeedError):
    """Resource absent or not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(NoteFeedError):
    """Uniqueness or business-rule violation."""

    status_code = status.HTTP_409_CONFLICT


def _field_name(loc: tuple) -> str:
    # loc looks like ("body", "tag_ids", 0) or ("query", "page")
    parts = [str(p) for p in loc[1:] if not isinstance(p, int)]
    return ".".join(parts) or "body"


def collect_field_errors(exc: RequestValidationError) -> List[Tuple[str, str]]:
    """Flatten a validation error into ordered (field, message) pairs."""
    pairs: List[Tuple[str, str]] = []
    for error in exc.errors():
        pairs.append((_field_name(tuple(error.get("loc", ()))), error.get("msg", "Invalid value")))
    return pairs


def _is_malformed_body(exc: RequestValidationError) -> bool:
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return True
        # the body as a whole is missing or is not a JSON object
        if tuple(error.get("loc", ())) == ("body",):
            return True
    return False


def register_exception_handlers(app: FastAPI) -> None:
    """Attach handlers translating typed errors to JSON responses."""

    @app.exception_handler(NoteFeedError)
    async def handle_notefeed_error(request: Request, exc: NoteFeedError):
        if exc.status_code >= 500:
            logger.error("Unhandled service error", extra={"path": request.url.path, "error": exc.message})
        else:
            logger.info(
                "Request rejected",
                extra={"path": request.url.path, "status_code": exc.status_code, "error": exc.message},
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        if _is_malformed_body(exc):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid JSON"}
            )

        errors: dict = {}
        for field, message in collect_field_errors(exc):
            # first message per field wins
            errors.setdefault(field, message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})
