# winajaya/main.py

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from winajaya.api.api import api_router
from winajaya.core.config import Settings, get_settings
from winajaya.db.init_db import connect_database
from winajaya.db.session import Database
from winajaya.middleware.body_limit import BodySizeLimitMiddleware
from winajaya.middleware.cors import OriginPolicyMiddleware
from winajaya.middleware.errors import ErrorResponseMiddleware
from winajaya.middleware.request_logging import RequestLoggingMiddleware, iso_timestamp

logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = "🚀 Backend is live"
API_STATUS_MESSAGE = "🚀 API is running"

API_NOT_FOUND_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database

    async def check_database():
        app.state.database_ready = await asyncio.to_thread(connect_database, database, settings)

    # Runs beside the server; an unreachable database neither delays nor stops it
    startup_check = asyncio.create_task(check_database())

    yield

    await startup_check
    database.dispose()


def create_application(
    settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    database = database or Database(settings.database_url)
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.database_ready = False

    # ---------- MIDDLEWARE ----------
    # Last added runs first: CORS -> errors -> body limit -> request log
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)
    app.add_middleware(ErrorResponseMiddleware, settings=settings)
    app.add_middleware(
        OriginPolicyMiddleware,
        allowed_origins=settings.allowed_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        # Liveness probe answers whatever the Origin
        exempt_paths=["/"],
    )

    # ---------- ROOT / HEALTH ----------
    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root():
        return LIVENESS_MESSAGE

    @app.get(settings.api_prefix, summary="API status")
    def api_status():
        return {
            "message": API_STATUS_MESSAGE,
            "timestamp": iso_timestamp(),
            "environment": settings.environment,
            "cors": "enabled",
            "allowedOrigins": settings.allowed_origins,
        }

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    # Must stay after the API routers so it only sees unmatched paths
    @app.api_route(
        f"{settings.api_prefix}/{{unmatched:path}}",
        methods=API_NOT_FOUND_METHODS,
        include_in_schema=False,
    )
    def api_route_not_found(request: Request, unmatched: str):
        return JSONResponse(
            status_code=404,
            content={"error": "API route not found", "path": request.url.path},
        )

    return app


app = create_application()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    logger.info("Backend server running on http://localhost:%s", settings.port)
    logger.info("API endpoint: http://localhost:%s%s", settings.port, settings.api_prefix)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
