"""SRE Status Dashboard API server."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from sre_server.config import get_settings
from sre_server.db.session import get_database, init_database
from sre_server.logging import configure_logging
from sre_server.middleware import CorrelationIDMiddleware, NoCacheMiddleware
from sre_server.routes import health_router, monitoring_api_router

# Configure logging (supports SRE_DASHBOARD_LOG_FORMAT=json for structured output).
_boot_settings = get_settings()
configure_logging(
    log_format=_boot_settings.log_format,
    debug=_boot_settings.debug,
    sql_echo=_boot_settings.db_echo,
)
logger = logging.getLogger(__name__)


class AppResponse(BaseModel):
    """App response."""

    name: str = "SRE Status Dashboard API"
    version: str = get_settings().version
    docs: str = "/docs"
    note: str = "Frontend not built. Place the dashboard build in static/."


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler."""

    # Startup
    logger.info("Starting SRE dashboard API server...")

    settings = get_settings()

    # Initialize database (defaults to SQLite if not configured)
    db = init_database(
        settings.effective_database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )
    await db.connect()

    if settings.is_sqlite:
        logger.info("Database connected (SQLite)")
        # Local development only; collectors own the production schema.
        await db.create_tables()
    else:
        logger.info(
            "Database connected (%s)", settings.effective_database_url.split(":", 1)[0]
        )

    logger.info("Reporting timezone: %s", settings.report_tz.key)

    yield

    # Shutdown
    logger.info("Shutting down SRE dashboard API server...")

    db = get_database()
    await db.disconnect()
    logger.info("Database disconnected")


# Create FastAPI app
app_settings = get_settings()
app = FastAPI(
    title="SRE Status Dashboard API",
    description="Infrastructure health, cloud usage and month-end forecasts",
    version=app_settings.version,
    lifespan=lifespan,
)

app.add_middleware(NoCacheMiddleware, path_prefix="/api")

# Add correlation ID middleware (runs before CORS so the ID is on every response)
app.add_middleware(CorrelationIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_allow_origins_list,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(monitoring_api_router)

# Static files directory (built frontend)
# Prefer packaged assets (`sre_server/static`) and fall back to monorepo path.
PACKAGE_STATIC_DIR = Path(__file__).resolve().parent / "static"
SOURCE_STATIC_DIR = Path(__file__).resolve().parents[2] / "static"
STATIC_DIR = PACKAGE_STATIC_DIR if PACKAGE_STATIC_DIR.exists() else SOURCE_STATIC_DIR

# Mount static files if the directory exists (production build)
if STATIC_DIR.exists() and (STATIC_DIR / "index.html").exists():
    assets_dir = STATIC_DIR / "assets"
    if assets_dir.exists():
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")

    @app.get("/{full_path:path}")
    async def serve_frontend(full_path: str):
        """Serve the dashboard for all non-API routes."""
        file_path = STATIC_DIR / full_path
        if file_path.exists() and file_path.is_file():
            return FileResponse(file_path)
        return FileResponse(STATIC_DIR / "index.html")

else:

    @app.get("/")
    async def root():
        """Root endpoint (dev mode without built frontend)."""
        return AppResponse()


def main():
    """Run the server."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "sre_server.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
