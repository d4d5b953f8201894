"""
Contest Video Checker - FastAPI Backend
Main application entry point with video analysis and health routing.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings, validate_runtime_settings
from errors import UploadError, VideoCheckError
from logging_config import configure_logging
from media.tempfiles import sweep_stale_files
from routers import health, video

logger = logging.getLogger(__name__)


async def _periodic_temp_sweep() -> None:
    interval_seconds = max(int(settings.TEMP_SWEEP_INTERVAL_SECONDS), 0)
    if interval_seconds <= 0:
        return
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = await asyncio.to_thread(
                sweep_stale_files,
                settings.UPLOAD_TEMP_DIR,
                settings.TEMP_MAX_AGE_SECONDS,
            )
            if removed:
                logger.info("🗑️ Temp sweep removed %s stale file(s).", removed)
        except Exception as exc:
            logger.warning("⚠️ Temp sweep tick failed: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    configure_logging(settings)
    validate_runtime_settings()
    logger.info("🎬 Starting Contest Video Checker API on port %s...", settings.API_PORT)
    logger.info("📁 Upload temp dir: %s", settings.UPLOAD_TEMP_DIR)
    logger.info("🔧 Make sure FFmpeg (%s) is installed on the system.", settings.FFPROBE_CMD)
    sweep_task = None
    if int(settings.TEMP_SWEEP_INTERVAL_SECONDS) > 0:
        sweep_task = asyncio.create_task(_periodic_temp_sweep())
    yield
    # Shutdown
    if sweep_task is not None:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass
    logger.info("👋 Shutting down API...")


app = FastAPI(
    title="Contest Video Checker API",
    description="Check uploaded videos against contest technical requirements",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VideoCheckError)
async def video_check_error_handler(request: Request, exc: VideoCheckError):
    """Uploads are rejected at transport level; analysis failures keep the success flag."""
    if isinstance(exc, UploadError):
        content = {"error": exc.message}
    else:
        logger.warning("Video analysis failed: %s", exc.message)
        content = {"success": False, "error": exc.message}
    return JSONResponse(status_code=exc.status_code, content=content)


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(video.router, tags=["Video"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Contest Video Checker API",
        "version": "0.1.0",
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
