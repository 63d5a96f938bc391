# hope for ocd backend api
# fastapi app over async mongodb, with an offline write queue and a scripted chat companion

import asyncio
import contextlib
import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hopeocd.config import require_backend_config, settings
from hopeocd.services.connectivity import connectivity
from hopeocd.services.db import db
from hopeocd.services.entity_store import registry
from hopeocd.services.offline_queue import offline_queue
from hopeocd.services.sync_service import flush_on_reconnect
from hopeocd.routers import (
    activities,
    chat,
    data,
    export,
    exposures,
    library,
    moods,
    notifications,
    progress,
    sync,
    thought_records,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: check config, connect, watch connectivity. shutdown: stop watching, close."""
    logger.info("Starting Hope for OCD backend...")
    require_backend_config()
    await db.connect()

    connectivity.subscribe(flush_on_reconnect(offline_queue, registry, db))
    watcher = asyncio.create_task(connectivity.watch(db, settings.CONNECTIVITY_PROBE_SECONDS))
    logger.info("Hope for OCD backend ready")
    yield
    logger.info("Shutting down Hope for OCD backend...")
    watcher.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await watcher
    await db.close()


app = FastAPI(
    title="Hope for OCD API",
    description="Backend API for OCD recovery self-management: mood, thought records, ERP tracking, chat companion, offline sync",
    version="0.1.0",
    lifespan=lifespan,
)

# cors: allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    """last-resort boundary: generic message and recovery actions, trace only in debug"""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    body = {
        "detail": "Something went wrong",
        "message": "Something unexpected happened. Your data is safe. Try reloading or return to the home screen.",
        "actions": ["reload", "home"],
    }
    if settings.DEBUG:
        body["trace"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=body)


# register routers
app.include_router(moods.router)
app.include_router(thought_records.router)
app.include_router(exposures.router)
app.include_router(activities.router)
app.include_router(chat.router)
app.include_router(export.router)
app.include_router(progress.router)
app.include_router(library.router)
app.include_router(data.router)
app.include_router(sync.router)
app.include_router(notifications.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "hopeocd-api", "online": connectivity.online}
