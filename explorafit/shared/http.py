import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any, Optional
from sqlalchemy.exc import SQLAlchemyError

from explorafit.shared.errors import AppError, AuthorizationError, StorageError

logger = logging.getLogger(__name__)

def ok(**extra):
    return {"ok": True, **extra}

def err(message: str, code: str = "bad_request", status: int = 400, details: Optional[Any] = None,
        headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"ok": False, "error": {"code": code, "message": message, "details": details}},
        headers=headers,
    )

async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthorizationError) else None
    return err(exc.message, code=exc.code, status=exc.status, details=exc.details, headers=headers)

async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return err("invalid input", code="validation_error", status=422, details=details)

async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("storage failure on %s", request.url.path)
    e = StorageError()
    return err(e.message, code=e.code, status=e.status)
