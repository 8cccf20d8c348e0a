import json
import logging
import os
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import time

logger = logging.getLogger("api")

# Credential fields masked in debug output
SENSITIVE_FIELDS = {"private_key", "seed_phrase"}


class ConditionalDebugMiddleware(BaseHTTPMiddleware):
    """
    Log raw write-request bodies only when debugging is enabled.

    Enable via environment variable: DEBUG_API_REQUESTS=true
    Or for specific endpoints: DEBUG_ENDPOINTS=trade/position,wallet/evm
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

        self.debug_enabled = is_debug_enabled()
        self.debug_endpoints = get_debug_endpoints()

        if self.debug_enabled:
            logger.info("🔧 API Request debugging enabled globally")
        elif self.debug_endpoints:
            logger.info(f"🔧 API Request debugging enabled for endpoints: {self.debug_endpoints}")

    def should_debug_request(self, request: Request) -> bool:
        """Check if this request should be debugged"""
        if request.method not in ("POST", "PUT"):
            return False

        if self.debug_enabled:
            return True

        path = str(request.url.path)
        return any(endpoint in path for endpoint in self.debug_endpoints)

    async def dispatch(self, request: Request, call_next):
        if not self.should_debug_request(request):
            return await call_next(request)

        start_time = time.time()
        await self.log_request(request)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"❌ Exception in request processing: {e}")
            logger.error(f"⏱️ Failed after {time.time() - start_time:.3f}s")
            raise

        if response.status_code == 400:
            logger.error(f"❌ Validation failed (400) for {request.url.path}")
        elif response.status_code >= 400:
            logger.error(f"❌ Request failed ({response.status_code}) for {request.url.path}")
        else:
            logger.info(f"✅ Request successful ({response.status_code}) for {request.url.path}")
        logger.info(f"⏱️ Request processed in {time.time() - start_time:.3f}s")

        return response

    async def log_request(self, request: Request):
        """Log the request body with credentials masked"""
        body = await request.body()

        if not body:
            logger.info(f"📥 DEBUG {request.method} request to {request.url.path} with empty body")
        else:
            try:
                json_data = json.loads(body.decode('utf-8'))
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error(f"❌ Failed to parse request body as JSON: {e}")
                logger.info(f"📊 Raw body: {body.decode('utf-8', errors='replace')}")
            else:
                if isinstance(json_data, dict):
                    json_data = {
                        key: ("***" if key in SENSITIVE_FIELDS else value)
                        for key, value in json_data.items()
                    }
                logger.info(f"📥 DEBUG Raw {request.method} request to {request.url.path}:")
                logger.info(f"📊 Request body: {json.dumps(json_data, indent=2)}")

                # Numeric fields of a trade arrive as numbers or strings
                if "/trade/position" in str(request.url.path) and isinstance(json_data, dict):
                    logger.info("🔍 Field analysis for trade:")
                    for key, value in json_data.items():
                        logger.info(f"   {key}: {value} (type: {type(value).__name__})")

        # Replay the consumed body for downstream processing
        async def receive():
            return {"type": "http.request", "body": body, "more_body": False}

        request._receive = receive


def is_debug_enabled() -> bool:
    """Check if API debugging is enabled"""
    return os.getenv('DEBUG_API_REQUESTS', 'false').lower() == 'true'


def get_debug_endpoints() -> list:
    """Get list of endpoints with debugging enabled"""
    debug_endpoints = os.getenv('DEBUG_ENDPOINTS', '')
    return [ep.strip() for ep in debug_endpoints.split(',') if ep.strip()]
