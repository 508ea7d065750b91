"""
Request logging and CORS middleware.
"""
import time
import logging
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.types import Receive, Scope, Send

# Set up logging
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an id and log its outcome.

    A caller-supplied ``X-Request-ID`` is reused so that a form submission
    and the prediction run it triggers share one id in the logs. Responses
    with status 400 or above are logged at WARNING.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(f"[{request_id}] {route} raised {type(e).__name__}: {e} ({elapsed_ms:.1f}ms)")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed_ms / 1000:.4f}"

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(level, f"[{request_id}] {route} -> {response.status_code} ({elapsed_ms:.1f}ms)")
        return response


class FunctionAwareCORSMiddleware(CORSMiddleware):
    """
    CORS middleware that leaves preflights of function endpoints to their routes.

    Function endpoints answer OPTIONS themselves with an empty body and a fixed
    ``Access-Control-Allow-Headers`` list. Every other path, and every
    non-preflight request, is handled by the stock middleware.
    """

    def __init__(self, app, function_prefix: str = "/functions/", **kwargs):
        super().__init__(app, **kwargs)
        self.function_prefix = function_prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] == "http"
            and scope["method"] == "OPTIONS"
            and scope["path"].startswith(self.function_prefix)
        ):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def setup_middlewares(app):
    app.add_middleware(RequestLoggingMiddleware)
