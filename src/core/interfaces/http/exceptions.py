"""Map exceptions onto the JSON error envelope.

    {"error": {"code": "...", "message": "...", "details": {...}}}

DomainException 子类自带 http_status_code / error_code，这里不区分模块。
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from src.core.domain.exceptions import DomainException


def error_response(
    status_code: int, code: str, message: str, details: dict | None = None
) -> JSONResponse:
    error: dict = {"code": code, "message": message}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.http_status_code, exc.error_code, exc.message, exc.details)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject query/body values FastAPI could not coerce (e.g. pageSize=0)."""
    fields = {
        ".".join(str(part) for part in err.get("loc", ())): err.get("msg", "")
        for err in exc.errors()
    }
    logger.debug(f"Rejected request {request.url.path}: {fields}")
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Invalid request parameters",
        fields,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "An internal error occurred"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
