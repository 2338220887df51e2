import logging
import uuid

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from partsdesk.core.config import settings
from partsdesk.core.exceptions import PartsDeskException

logger = logging.getLogger("partsdesk.errors")


def _validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return details


def register_error_handlers(app):
    @app.exception_handler(PartsDeskException)
    async def partsdesk_exception(request: Request, exc: PartsDeskException):
        body = exc.to_dict()
        if exc.status_code >= 500:
            logger.error("%s path=%s method=%s: %s", exc.error, request.url.path, request.method, exc.message)
            if settings.is_production:
                body.pop("message", None)
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def validation_exception(request: Request, exc: RequestValidationError):
        details = _validation_details(exc)
        message = ", ".join(f"{d['field']}: {d['message']}" for d in details)
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "message": message, "details": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):  # noqa: BLE001
        correlation_id = uuid.uuid4().hex
        logger.exception("Unhandled error cid=%s path=%s method=%s", correlation_id, request.url.path, request.method)
        body = {"error": "Internal server error", "cid": correlation_id}
        if not settings.is_production:
            body["message"] = str(exc)
        return JSONResponse(status_code=500, content=body)

    return app
