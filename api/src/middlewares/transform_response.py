from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response
from starlette.requests import Request
import json

# FastAPI internal endpoints served as-is
SKIP_PATHS = ("/openapi.json", "/docs", "/redoc")
ENVELOPE_KEYS = ("statusCode", "message", "data")


class TransformResponseMiddleware(BaseHTTPMiddleware):
    """
    Wrap every JSON body as {"statusCode", "message", "data"}.

    Bodies that already have the envelope (error handlers) pass through.
    A bare {"message": ...} body lifts its message into the envelope.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if any(request.url.path.startswith(path) for path in SKIP_PATHS):
            return response

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("application/json"):
            return response

        response_body = b""
        async for chunk in response.body_iterator:
            response_body += chunk

        headers = {k: v for k, v in response.headers.items() if k.lower() != "content-length"}

        try:
            body = json.loads(response_body.decode())
        except (json.JSONDecodeError, UnicodeDecodeError):
            return Response(
                content=response_body,
                status_code=response.status_code,
                headers=headers,
                media_type=response.media_type
            )

        if isinstance(body, dict) and all(key in body for key in ENVELOPE_KEYS):
            return JSONResponse(content=body, status_code=response.status_code, headers=headers)

        message = "OK" if 200 <= response.status_code < 300 else "Error"
        if isinstance(body, dict) and set(body) == {"message"}:
            message = body["message"]

        transformed = {
            "statusCode": response.status_code,
            "message": message,
            "data": body,
        }

        return JSONResponse(content=transformed, status_code=response.status_code, headers=headers)
