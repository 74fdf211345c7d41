"""Middleware attaching a request id to each inbound request."""

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from zipped_proxy.shared.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags the request state with an id and logs how the request ended."""

    async def dispatch(self, request: Request, call_next):
        request_id = uuid4().hex
        request.state.request_id = request_id

        logger.debug(f"Incoming request {request_id}: {request.method} {request.url.path}")

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({request_id})")
        return response
