# handlers/fallback_handler.py
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fintrack.engine.errors import (
    FinanceError,
    InvalidCategory,
    InvalidDateRange,
    InvalidGoal,
    InvalidRequest,
    InvalidTransaction,
    RecordNotFound,
    ReferentialIntegrityViolation,
)
from fintrack.web_app import Unauthorized, app

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    InvalidDateRange: 400,
    InvalidGoal: 400,
    InvalidTransaction: 400,
    InvalidCategory: 400,
    InvalidRequest: 400,
    RecordNotFound: 404,
    ReferentialIntegrityViolation: 409,
}

DATE_FIELDS = {"date", "deadline", "startDate", "endDate"}

# Body/path problems reported as the error kind of the resource being written
ERROR_BY_PATH = (
    ("/api/transactions", InvalidTransaction),
    ("/api/savings-goals", InvalidGoal),
    ("/api/categories", InvalidCategory),
)


def status_for(exc: FinanceError) -> int:
    for error_cls, status in STATUS_BY_ERROR.items():
        if isinstance(exc, error_cls):
            return status
    return 500


@app.exception_handler(FinanceError)
def handle_finance_error(request: Request, exc: FinanceError):
    status = status_for(exc)
    if isinstance(exc, ReferentialIntegrityViolation) or status == 500:
        logger.error("%s %s failed: %s: %s", request.method, request.url.path, exc.kind, exc.message)
    else:
        logger.warning("%s %s rejected: %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=status, content={"error": exc.kind, "detail": exc.message})


@app.exception_handler(Unauthorized)
def handle_unauthorized(request: Request, exc: Unauthorized):
    logger.warning("%s %s unauthorized: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=401, content={"error": "Unauthorized"})


def error_for_validation(path: str, errors) -> FinanceError:
    """Turn FastAPI's request validation errors into one of our error kinds."""
    parts = []
    fields = set()
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if loc:
            fields.add(loc[-1])
        where = ".".join(loc[1:]) or ".".join(loc) or "request"
        parts.append(f"{where}: {err.get('msg', 'invalid value')}")
    message = "; ".join(parts) or "invalid request"

    if fields & DATE_FIELDS:
        return InvalidDateRange(message)
    for prefix, error_cls in ERROR_BY_PATH:
        if path.startswith(prefix):
            return error_cls(message)
    return InvalidRequest(message)


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    return handle_finance_error(request, error_for_validation(request.url.path, exc.errors()))
