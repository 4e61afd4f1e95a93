# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.errors import InvalidInput, StorefrontError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(err: StorefrontError) -> dict:
    body = {"status": "error", "code": err.code, "message": err.message}
    if isinstance(err, InvalidInput):
        #bledy walidacji: komunikat takze pod "error"
        body["error"] = err.message
    return body


def _field_name(loc) -> str:
    #("body", "items", 0, "quantity") -> "items.0.quantity"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


def register_error_handlers(app: FastAPI):
    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = {}
        for error in exc.errors():
            fields.setdefault(_field_name(error.get("loc", ())), error.get("msg", "Invalid value"))
        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "code": "INVALID_INPUT",
                "message": "Invalid request",
                "error": fields,
            },
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "code": "INTERNAL", "message": "Internal Server Error"},
        )
