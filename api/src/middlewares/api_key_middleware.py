import hmac

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

# Paths reachable without a key
PUBLIC_PATHS = ("/", "/api/v1/health", "/docs", "/redoc", "/openapi.json")


class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Authenticate requests using the shared API key.

    The key is read from the X-API-Key header, falling back to
    Authorization (raw key or "Bearer <key>"). Missing or wrong keys get
    401 in the standard response envelope.
    """

    def __init__(self, app, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    def extract_key(self, request: Request) -> str:
        api_key = request.headers.get("X-API-Key") or request.headers.get("Authorization") or ""
        if api_key.lower().startswith("bearer "):
            api_key = api_key[7:]
        return api_key.strip()

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        api_key = self.extract_key(request)
        if not api_key or not hmac.compare_digest(api_key.encode(), self.api_key.encode()):
            return JSONResponse(
                content={
                    "statusCode": 401,
                    "message": "Unauthorized",
                    "data": {"detail": "Valid API key required. Include 'X-API-Key' header with your request."},
                },
                status_code=401
            )

        return await call_next(request)
