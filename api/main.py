"""
Parisar — FastAPI Application Entry Point
"""
import logging
import os
from contextlib import asynccontextmanager

from alembic.config import Config
from alembic import command as alembic_command

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.database import DATABASE_URL, SessionLocal
from api.routes import insights, playground, readings
from pipeline.refresh.refresher import DEFAULT_INTERVAL_SECONDS, ReadingsRefresher
from store.exceptions import ReadingError, ValidationError
from store.gateway import list_readings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

REFRESH_INTERVAL_SECONDS = int(
    os.environ.get("REFRESH_INTERVAL_SECONDS", str(DEFAULT_INTERVAL_SECONDS))
)
RUN_MIGRATIONS = os.environ.get("RUN_MIGRATIONS", "true").lower() in ("1", "true", "yes")


def _fetch_readings():
    """Fetch function handed to the refresher — one short-lived session per cycle."""
    db = SessionLocal()
    try:
        return list_readings(db)
    finally:
        db.close()


def run_migrations() -> None:
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", DATABASE_URL)
    alembic_command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations applied successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Step 0: Run database migrations ───────────────────────────────────────
    if RUN_MIGRATIONS:
        try:
            run_migrations()
        except Exception as e:
            logger.error("Migration failed: %s", e)
            raise
    else:
        logger.info("RUN_MIGRATIONS disabled — skipping migrations")

    # ── Step 1: Start the dashboard refresher ─────────────────────────────────
    app.state.refresher.start()
    logger.info("Parisar API started")
    yield
    app.state.refresher.stop()
    logger.info("Parisar API shutting down")


app = FastAPI(
    title="Parisar API",
    description="City air-quality readings, fleet statistics and what-if AQI prediction",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.refresher = ReadingsRefresher(_fetch_readings, REFRESH_INTERVAL_SECONDS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReadingError)
async def reading_error_handler(request: Request, exc: ReadingError):
    status_code = 400 if isinstance(exc, ValidationError) else 500
    if status_code == 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"error": exc.message})


# Routers
app.include_router(readings.router,   prefix="/api/get/aqi", tags=["Readings"])
app.include_router(insights.router,   prefix="/api/aqi",     tags=["Insights"])
app.include_router(playground.router, prefix="/api/aqi",     tags=["Playground"])


@app.get("/api/health", tags=["Health"])
def health():
    return {"status": "ok", "service": "parisar-api", "version": "1.0.0"}
