import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

SERVER_ERROR = "Server Error"


class RequestError(Exception):
    """A 400 reported in the same `{"errors": [...]}` shape as body validation."""

    def __init__(self, msg: str, param: str | None = None):
        super().__init__(msg)
        self.msg = msg
        self.param = param


def server_error(db: Session, exc: Exception, action: str) -> HTTPException:
    """Roll back, log the failure and build the opaque 500 for the caller."""
    db.rollback()
    logger.exception("Failed to %s: %s", action, exc)
    return HTTPException(status_code=500, detail=SERVER_ERROR)


def _format_errors(errors):
    formatted = []
    for err in errors:
        loc = list(err.get("loc", ()))
        location = loc[0] if loc else "body"
        param = ".".join(str(part) for part in loc[1:]) or location
        message = err.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append({"msg": message, "param": param, "location": location})
    return formatted


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # a malformed id can never match a stored row
    if any((err.get("loc") or ("",))[0] == "path" for err in errors):
        return JSONResponse(status_code=404, content={"detail": "Resource not found"})
    return JSONResponse(status_code=400, content={"errors": _format_errors(errors)})


async def request_error_handler(request: Request, exc: RequestError):
    error = {"msg": exc.msg}
    if exc.param:
        error.update({"param": exc.param, "location": "body"})
    return JSONResponse(status_code=400, content={"errors": [error]})


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": SERVER_ERROR})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RequestError, request_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
