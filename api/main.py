from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn
import logging
import os

# Logtail direct integration
from logtail import LogtailHandler

from src.common import ApiError
from src.middlewares.transform_response import TransformResponseMiddleware
from src.middlewares.conditional_debug_middleware import ConditionalDebugMiddleware
from src.middlewares.api_key_middleware import APIKeyMiddleware
from src.middlewares.logging_middleware import LoggingMiddleware

from src.positions.api import router as positions_router
from src.wallets.api import router as wallets_router
from src.referrals.api import router as referrals_router
from src.api import router as base_router
from database import engine, init_models

# Create FastAPI application
app = FastAPI(
    title="Trade Ledger API",
    description="FastAPI backend for trading bot wallets, positions and referrals",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={
        "persistAuthorization": True,  # Keep authorization between page refreshes
        "displayRequestDuration": True,  # Show request timing
    }
)


# Get API key from environment
API_SECRET_KEY = os.getenv("API_SECRET_KEY")
if not API_SECRET_KEY:
    raise ValueError("API_SECRET_KEY environment variable is required but not set")

# Add CORS middleware for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API Key authentication goes after CORS but before the other middlewares
app.add_middleware(APIKeyMiddleware, api_key=API_SECRET_KEY)

# Request logging, conditional body debugging and response envelope
app.add_middleware(LoggingMiddleware)
app.add_middleware(ConditionalDebugMiddleware)
app.add_middleware(TransformResponseMiddleware)


def setup_api_logging():
    """Configure the "api" logger: Logtail when configured, console always"""
    source_token = os.getenv('LOGTAIL_SOURCE_TOKEN')
    host = os.getenv('LOGTAIL_HOST')

    logger = logging.getLogger("api")
    logger.handlers = []  # Clear existing handlers
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('%(asctime)s - API - %(levelname)s - %(message)s'))

    if source_token and host:
        logger.setLevel(logging.DEBUG)
        logger.addHandler(LogtailHandler(source_token=source_token, host=host))
        logger.addHandler(console_handler)
        logger.info("✅ Logtail handler added successfully")
    else:
        logger.setLevel(logging.INFO)
        logger.addHandler(console_handler)
        logger.info(f"❌ Missing logtail config - Token: {bool(source_token)}, Host: {bool(host)}")
    return logger

api_logger = setup_api_logging()


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """Render domain errors as the standard envelope"""
    if exc.status_code >= 500:
        api_logger.error(f"❌ {request.method} {request.url.path} failed: {exc.message} {exc.details}")
    else:
        api_logger.warning(f"⚠️ {request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "statusCode": exc.status_code,
            "message": exc.message,
            "data": exc.details,
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Schema failures are reported as 400 with per-field details"""
    api_logger.error("🚨 VALIDATION ERROR DETAILS:")
    api_logger.error(f"   URL: {request.url}")
    api_logger.error(f"   Method: {request.method}")

    errors = []
    for error in exc.errors():
        field = ' -> '.join(str(loc) for loc in error['loc'])
        api_logger.error(f"   Field: {field}")
        api_logger.error(f"   Error: {error['msg']}")
        api_logger.error(f"   Type: {error['type']}")
        errors.append({"field": field, "message": error['msg'], "type": error['type']})

    return JSONResponse(
        status_code=400,
        content={
            "statusCode": 400,
            "message": "Validation Error",
            "data": {"detail": errors}
        }
    )

# Include API routers
app.include_router(base_router, prefix="/api/v1")
app.include_router(positions_router, prefix="/api/v1")
app.include_router(wallets_router, prefix="/api/v1")
app.include_router(referrals_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup"""
    await init_models()
    api_logger.info("🚀 Trade Ledger API started")


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Trade Ledger API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    await engine.dispose()
    api_logger.info("Database connections closed")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
