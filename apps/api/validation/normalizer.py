"""
Turns raw ffprobe output into a VideoDescriptor.
"""

import logging
import re
from typing import Any, Dict, Optional

from errors import MetadataError
from .models import UploadInfo, VideoDescriptor

logger = logging.getLogger(__name__)

# ffprobe rationals are int32 numerator/denominator pairs.
_RATIO_PATTERN = re.compile(r"([0-9]{1,10})/([0-9]{1,10})")


def parse_frame_rate(expr: Any) -> float:
    """
    Parse an ffprobe rate such as "24/1" or "24000/1001" into frames per second.

    Only "<digits>/<digits>" is accepted. The text is never evaluated.
    Raises MetadataError for anything else, including a zero rate.
    """
    if not isinstance(expr, str):
        raise MetadataError(f"Invalid frame rate expression: {expr!r}")
    match = _RATIO_PATTERN.fullmatch(expr)
    if not match:
        raise MetadataError(f"Invalid frame rate expression: {expr!r}")

    numerator, denominator = int(match.group(1)), int(match.group(2))
    if denominator == 0 or numerator == 0:
        raise MetadataError(f"Frame rate is undefined: {expr!r}")
    return numerator / denominator


def _to_float(value: Any) -> Optional[float]:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if parsed != parsed or parsed < 0:  # NaN or negative
        return None
    return parsed


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def find_video_stream(probe: Dict[str, Any]) -> Dict[str, Any]:
    for stream in probe.get("streams") or []:
        if stream.get("codec_type") == "video":
            return stream
    raise MetadataError("No video stream found")


def normalize_probe(probe: Dict[str, Any], upload: UploadInfo) -> VideoDescriptor:
    """Build a descriptor from an ffprobe JSON document and the upload's own metadata."""
    stream = find_video_stream(probe)
    fmt = probe.get("format") or {}

    duration = _to_float(fmt.get("duration"))
    if duration is None:
        duration = _to_float(stream.get("duration"))
    if duration is None:
        duration = 0.0

    rate_expr = stream.get("r_frame_rate")
    if rate_expr in (None, "0/0"):
        rate_expr = stream.get("avg_frame_rate", rate_expr)
    frame_rate = parse_frame_rate(rate_expr)

    frame_count = _to_int(stream.get("nb_frames"))
    if not frame_count or frame_count <= 0:
        frame_count = int(round(duration * frame_rate))

    width = _to_int(stream.get("width"))
    height = _to_int(stream.get("height"))
    if not width or not height or width <= 0 or height <= 0:
        raise MetadataError("Video stream has no usable dimensions")

    bit_rate = _to_int(fmt.get("bit_rate"))
    profile = stream.get("profile")

    descriptor = VideoDescriptor(
        duration_seconds=duration,
        width=width,
        height=height,
        frame_rate=round(frame_rate, 2),
        frame_count=frame_count,
        codec_name=str(stream.get("codec_name") or ""),
        profile=str(profile) if profile else None,
        container_format=str(fmt.get("format_name") or ""),
        bit_rate=bit_rate if bit_rate and bit_rate > 0 else None,
        file_size=upload.file_size,
        mime_type=upload.mime_type or "",
        file_name=upload.file_name,
    )
    logger.debug(
        "Normalized %s: %sx%s %.2ffps %s frames codec=%s",
        upload.file_name,
        descriptor.width,
        descriptor.height,
        descriptor.frame_rate,
        descriptor.frame_count,
        descriptor.codec_name,
    )
    return descriptor
