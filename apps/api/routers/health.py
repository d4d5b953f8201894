"""
Health check endpoints.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from config import settings
from media.probe import is_ffprobe_available

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns overall system health status.
    """
    health_status = {
        "status": "healthy",
        "api": "up",
        "ffprobe": "available" if is_ffprobe_available() else "missing",
        "temp_dir": "unknown",
    }
    if health_status["ffprobe"] == "missing":
        health_status["status"] = "degraded"

    try:
        temp_dir = Path(settings.UPLOAD_TEMP_DIR)
        temp_dir.mkdir(parents=True, exist_ok=True)
        health_status["temp_dir"] = "writable" if temp_dir.is_dir() else "missing"
    except OSError as e:
        health_status["temp_dir"] = f"down: {str(e)}"
        health_status["status"] = "degraded"

    return health_status


@router.get("/health/ready")
async def readiness_check():
    """Kubernetes-style readiness probe."""
    missing = []
    if not is_ffprobe_available():
        missing.append(settings.FFPROBE_CMD)

    if missing:
        return JSONResponse(
            status_code=503,
            content={"ready": False, "missing": missing},
        )
    return {"ready": True}


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
