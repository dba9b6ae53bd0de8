"""
Gestionnaires d’exceptions: toutes les erreurs sont rendues au même format
{"success": false, "message": "..."} avec le code HTTP correspondant.
- AppError (homedecor.errors): code et message portés par l'exception.
- HTTPException: code conservé, detail => message (ex: 429 du rate limiter).
- RequestValidationError: 400 avec le premier champ invalide.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from homedecor.errors import AppError

logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors() or []
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc)
    msg = first.get("msg") or "invalid value"
    # pydantic préfixe les ValueError des validateurs
    if msg.startswith(VALUE_ERROR_PREFIX):
        msg = msg[len(VALUE_ERROR_PREFIX):]
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return _failure(exc.status_code, exc.message)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return _failure(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _failure(400, _validation_message(exc))
