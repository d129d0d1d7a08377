import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def _field_name(loc: tuple) -> str:
    # ("body", "paymentData", "amountPaid") -> "paymentData.amountPaid"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or str(loc[0])


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    names = []
    for err in exc.errors():
        name = _field_name(tuple(err.get("loc", ())))
        if name not in names:
            names.append(name)
    logger.info("rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        f"Missing or invalid fields: {', '.join(names)}",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
