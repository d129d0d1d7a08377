import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from admin_gateway.core.errors import error_response

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log plus the last-resort boundary: nothing escapes unhandled."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("unhandled error on %s %s", request.method, request.url.path)
            response = error_response(500, str(exc) or exc.__class__.__name__)

        duration = time.monotonic() - start
        logger.info(
            "%s %s -> %s (%.2fs)",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )

        return response
