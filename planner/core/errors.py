# File: planner/core/errors.py

"""
Error taxonomy for the planner API and the handlers that turn it into the
``{"success": false, "error": "..."}`` envelope.

Services raise the classes below; routes never build error responses by hand.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from planner.core.logging import get_logger

logger = get_logger(__name__)


class PlannerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PlannerError):
    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(PlannerError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(PlannerError):
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(PlannerError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(PlannerError):
    # Duplicates are reported as bad requests on the wire.
    status_code = status.HTTP_400_BAD_REQUEST


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


def format_validation_errors(errors) -> str:
    """
    Collapse Pydantic error dicts into one readable sentence.

    ``[{"loc": ("body", "name"), "msg": "Field required"}]`` becomes
    ``"name: Field required"``.
    """
    parts = []
    for err in errors:
        if err.get("type") == "json_invalid":
            parts.append("Malformed JSON body")
            continue
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PlannerError)
    async def planner_error_handler(request: Request, exc: PlannerError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(format_validation_errors(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Server Error"),
        )
