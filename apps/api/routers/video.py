"""
Video analysis router: upload a file, probe it, and check it against the contest rules.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from config import settings
from errors import UploadError
from logging_config import get_security_logger
from media.probe import probe_video_async
from media.tempfiles import sanitize_filename, scoped_upload_file
from validation import (
    ComplianceCriteria,
    DEFAULT_CRITERIA,
    UploadInfo,
    VideoDescriptor,
    build_report,
    evaluate_compliance,
    normalize_probe,
)

router = APIRouter()
logger = logging.getLogger(__name__)
security_logger = get_security_logger()

ALLOWED_VIDEO_MIME_TYPES = {"video/mp4", "video/quicktime", "video/x-msvideo"}
ALLOWED_VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi"}


def get_criteria() -> ComplianceCriteria:
    """Rule set for the current contest. Override in app.dependency_overrides to swap rules."""
    return DEFAULT_CRITERIA


def is_accepted_video(filename: Optional[str], content_type: Optional[str]) -> bool:
    suffix = Path(sanitize_filename(filename)).suffix.lower()
    return (content_type or "").lower() in ALLOWED_VIDEO_MIME_TYPES or suffix in ALLOWED_VIDEO_EXTENSIONS


def _video_info(descriptor: VideoDescriptor) -> dict:
    return {
        "duration": descriptor.display_duration,
        "width": descriptor.width,
        "height": descriptor.height,
        "frameRate": descriptor.frame_rate,
        "frameCount": descriptor.frame_count,
        "codec": descriptor.codec_name,
        "profile": descriptor.profile,
        "bitRate": descriptor.bit_rate,
        "format": descriptor.container_format,
        "fileName": descriptor.file_name,
        "fileSize": descriptor.file_size,
        "mimeType": descriptor.mime_type,
    }


@router.post("/analyze-video")
async def analyze_video(
    video: Optional[UploadFile] = File(None),
    criteria: ComplianceCriteria = Depends(get_criteria),
):
    """Analyze one uploaded video and report contest compliance."""
    if video is None or not video.filename:
        raise UploadError("No video file provided", status_code=400)

    file_name = video.filename
    content_type = (video.content_type or "").lower()
    if not is_accepted_video(file_name, content_type):
        security_logger.warning("Rejected upload %r: unsupported type %r", file_name, content_type)
        raise UploadError("Unsupported file type", status_code=415)

    try:
        async with scoped_upload_file(
            video,
            max_bytes=int(settings.MAX_UPLOAD_BYTES),
            temp_dir=settings.UPLOAD_TEMP_DIR,
        ) as (temp_path, file_size):
            probe = await probe_video_async(str(temp_path))
    except UploadError as exc:
        security_logger.warning("Rejected upload %r: %s", file_name, exc.message)
        raise
    finally:
        await video.close()

    upload = UploadInfo(file_name=file_name, file_size=file_size, mime_type=content_type)
    descriptor = normalize_probe(probe, upload)
    verdict = evaluate_compliance(descriptor, criteria)
    report = build_report(verdict, descriptor)

    logger.info(
        "Analyzed %s (%s bytes): %s",
        file_name,
        file_size,
        "compliant" if verdict.overall else "not compliant",
    )

    return {
        "success": True,
        "videoInfo": _video_info(descriptor),
        "validation": verdict.model_dump(by_alias=True),
        "report": report.model_dump(),
    }
