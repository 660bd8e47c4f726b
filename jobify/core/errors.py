# jobify/core/errors.py
"""
Error taxonomy shared by every route.

Handlers raise one of the classes below; `register_exception_handlers`
turns them into `{"msg": ...}` JSON bodies. Request validation failures
are reported as an `errors` array with status 400.
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

SERVER_ERROR_MSG = "Server error"


class JobifyError(Exception):
    status_code = 500

    def __init__(self, msg: str = SERVER_ERROR_MSG):
        super().__init__(msg)
        self.msg = msg


class ValidationError(JobifyError):
    status_code = 400


class ConflictError(JobifyError):
    # duplicate email, duplicate application, closed job
    status_code = 400


class AuthError(JobifyError):
    status_code = 401


class ForbiddenError(AuthError):
    status_code = 403


class NotFoundError(JobifyError):
    status_code = 404


class InternalError(JobifyError):
    status_code = 500


def _format_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    out = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        msg = err.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        # list indexes and JSON decode positions are not field names
        names = [p for p in loc[1:] if isinstance(p, str)]
        out.append({
            "msg": msg,
            "param": names[-1] if names else "",
            "location": str(loc[0]) if loc else "body",
        })
    return out


async def jobify_error_handler(request: Request, exc: JobifyError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.msg)
        return JSONResponse(status_code=exc.status_code, content={"msg": SERVER_ERROR_MSG})
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.msg})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"errors": _format_validation_errors(exc)})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"msg": SERVER_ERROR_MSG})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JobifyError, jobify_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, unhandled_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
