# app/main.py
import json
import logging
import sys
import time
import uuid

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes_datasets import router as datasets_router
from app.api.routes_health import router as health_router
from app.core.config import ConfigError, Settings, load_settings
from app.services.collection_init import initialize_collection
from app.services.mongo import DatabaseError

CORRELATION_HEADER = "CORRELATIONID"

# ----------------------------
# Logging (structured JSON)
# ----------------------------
logger = logging.getLogger("ml_dataset")


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title="ML Dataset API")
    app.state.settings = settings

    # ----------------------------
    # Middleware: Correlation ID + Logs
    # ----------------------------
    @app.middleware("http")
    async def add_correlation_id_and_log(request: Request, call_next):
        # If caller provides a correlation id, keep it; else generate one
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())

        start = time.time()
        response = await call_next(request)
        duration_ms = int((time.time() - start) * 1000)

        response.headers[CORRELATION_HEADER] = correlation_id

        log_line = {
            "msg": "request",
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "client": request.client.host if request.client else None,
            "mongodb": f"{settings.database}.{settings.collection}",
        }
        logger.info(json.dumps(log_line))

        return response

    # outermost, so CORS headers also land on error responses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["X-Requested-With", "Content-Type", "Authorization", CORRELATION_HEADER],
        expose_headers=[CORRELATION_HEADER],
    )

    # Non-health errors go out as plain text
    @app.exception_handler(StarletteHTTPException)
    async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    # ----------------------------
    # Routers
    # ----------------------------
    app.include_router(health_router)
    app.include_router(datasets_router)

    return app


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.critical("Fatal: %s", e)
        return 1
    logging.getLogger().setLevel(settings.log_level)

    # collection must exist before the server accepts requests
    try:
        created = initialize_collection(settings)
    except DatabaseError as e:
        logger.critical("Fatal: not able to initialize the MongoDB collection %s: %s", settings.collection, e)
        return 1
    if created:
        logger.info("Seeded collection %s.%s", settings.database, settings.collection)

    logger.info("Starting server at %s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
