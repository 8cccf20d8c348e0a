import time
import uuid
import logging
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("api")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with a short id and log its outcome and latency.
    The id is echoed back in the X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} failed after "
                f"{process_time * 1000:.1f}ms: {type(e).__name__}: {e}",
                exc_info=True
            )
            raise

        process_time = time.time() - start_time
        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            f"[{request_id}] {request.method} {request.url.path} -> "
            f"{response.status_code} ({process_time * 1000:.1f}ms)"
        )

        response.headers["X-Request-ID"] = request_id
        return response
