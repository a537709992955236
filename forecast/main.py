"""Housing Forecast — FastAPI Application Entry Point.

Keeps a local copy of the housing service hub's users, rooms and batches in
sync, and records daily per-location occupancy snapshots.
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forecast.database import check_connection, init_db
from forecast.scheduler.jobs import start_scheduler, stop_scheduler
from forecast.api.snapshot_routes import router as snapshot_router
from forecast.api.poller_routes import router as poller_router
from forecast.core.logging import get_logger

logger = get_logger("main")


IS_SERVERLESS = bool(
    os.environ.get("VERCEL") or os.environ.get("AWS_LAMBDA_FUNCTION_NAME")
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 Housing Forecast starting up...")
    logger.info(f"🌍 Environment: {'SERVERLESS' if IS_SERVERLESS else 'LOCAL'}")
    # Test connection first
    db_ok = check_connection()
    if db_ok:
        try:
            init_db()
        except Exception as e:
            logger.error(f"❌ Table creation failed: {e}")
    else:
        logger.error("❌ Database NOT connected — poller cycles will fail until it is")
    if not IS_SERVERLESS:
        start_scheduler()
    yield
    if not IS_SERVERLESS:
        stop_scheduler()
    logger.info("Housing Forecast shut down")


app = FastAPI(
    title="Housing Forecast",
    description="Poll the housing service hub, reconcile users/rooms/batches locally, and serve occupancy snapshots.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS (reporting dashboards read snapshots from the browser)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(snapshot_router)
app.include_router(poller_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "housing-forecast",
        "version": "1.0.0",
    }


@app.get("/debug/db", tags=["System"])
async def debug_db():
    """Debug endpoint — check database connectivity."""
    from forecast.database import db_url, masked_url

    return {
        "connected": check_connection(),
        "backend": db_url.get_backend_name(),
        "url": masked_url(),
        "environment": "serverless" if IS_SERVERLESS else "local",
    }
