from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from routes import access_codes, checkout, webhooks

import logging
from pathlib import Path
from dotenv import load_dotenv

from utils.app_config import get_port, get_environment, get_cors_origins, get_stripe_mode, get_webhook_secret

# Load environment variables
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Lifespan context manager for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    port = get_port()
    logger.info(f"Wedding Newspaper API running on port {port}")
    logger.info(f"Health check: http://localhost:{port}/api/health")
    logger.info(f"Environment: {get_environment()}")

    # Stripe config: log mode (test/live) from key prefix, never the key itself
    stripe_mode = get_stripe_mode()
    if stripe_mode == "unset":
        logger.error("STRIPE_SECRET_KEY is not set. Checkout sessions will fail.")
    else:
        logger.info("STRIPE_MODE = %s (from Stripe key prefix)", stripe_mode)
    if not get_webhook_secret():
        logger.error("STRIPE_WEBHOOK_SECRET is not set. Every webhook will be rejected.")

    yield

    # Shutdown
    logger.info("Shutting down Wedding Newspaper API")


# Create FastAPI app
app = FastAPI(
    title="Wedding Newspaper API",
    description="Access codes, Stripe checkout and payment webhooks for the AI Wedding Newspaper Generator",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=get_cors_origins(),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

# Include routers
app.include_router(webhooks.router)
app.include_router(access_codes.router)
app.include_router(checkout.router)


# Health check
@app.get("/api/health")
async def health_check():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "message": "Wedding Newspaper API is running!",
        "environment": get_environment(),
    }


# Validation error handler: malformed or mistyped bodies are client errors (400), logged with a request_id
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = str(uuid.uuid4())
    errors = exc.errors()
    path = getattr(request, "url", None) and getattr(request.url, "path", "") or ""
    logger.warning(
        "Request validation failed request_id=%s path=%s errors=%s",
        request_id,
        path,
        [(e.get("loc"), e.get("msg"), e.get("type")) for e in errors],
    )
    return JSONResponse(
        status_code=400,
        content={
            "detail": [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors],
            "request_id": request_id,
        },
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "server:app",
        host="0.0.0.0",
        port=get_port(),
        reload=get_environment() == "development"
    )
