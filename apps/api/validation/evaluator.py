"""
Contest compliance rules applied to a VideoDescriptor.
"""

import logging
from typing import Tuple

from .models import (
    ComplianceCriteria,
    ComplianceVerdict,
    CriterionResult,
    DEFAULT_CRITERIA,
    VideoDescriptor,
)

logger = logging.getLogger(__name__)

# Absorbs binary rounding so that e.g. |23.9 - 24| still counts as 0.1.
_TOLERANCE_EPSILON = 1e-9

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

# Checked in order; first substring hit wins.
_CODEC_ALIASES: Tuple[Tuple[str, str], ...] = (
    ("h264", "H.264"),
    ("avc", "H.264"),
    ("avc1", "H.264"),
    ("hevc", "H.265"),
    ("h265", "H.265"),
    ("hev1", "H.265"),
    ("hvc1", "H.265"),
)

# Accepted regardless of criteria.allowed_codec_tokens. hev1/hvc1 are the
# MP4 sample-entry tags of H.265.
_CODEC_FALLBACK_TOKENS = ("avc", "hevc", "hev1", "hvc1")


def format_number(value: float) -> str:
    """Render with at most two decimals and no trailing zeros: 24.0 -> "24", 23.98 -> "23.98"."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_file_size(size_bytes: int) -> str:
    if size_bytes == 0:
        return "0 Bytes"
    unit = 0
    while unit < len(_SIZE_UNITS) - 1 and size_bytes >= 1024 ** (unit + 1):
        unit += 1
    return f"{format_number(size_bytes / 1024 ** unit)} {_SIZE_UNITS[unit]}"


def codec_display_name(codec: str) -> str:
    lowered = (codec or "").lower()
    for key, label in _CODEC_ALIASES:
        if key in lowered:
            return label
    return (codec or "").upper()


def format_display_name(container_format: str, mime_type: str) -> str:
    fmt = (container_format or "").lower()
    mime = mime_type or ""
    if "mp4" in fmt or "mp4" in mime:
        return "MP4"
    if "mov" in fmt or "quicktime" in fmt or "quicktime" in mime:
        return "MOV"
    return (container_format or "").upper()


def _within(value: float, target: float, tolerance: float) -> bool:
    return abs(value - target) <= tolerance + _TOLERANCE_EPSILON


def is_codec_allowed(codec: str, criteria: ComplianceCriteria = DEFAULT_CRITERIA) -> bool:
    """Configured tokens plus the unconditional H.264/H.265 alias fallbacks."""
    lowered = (codec or "").lower()
    if not lowered:
        return False
    if any(token.lower() in lowered for token in criteria.allowed_codec_tokens):
        return True
    return any(alias in lowered for alias in _CODEC_FALLBACK_TOKENS)


def is_format_allowed(container_format: str, mime_type: str, criteria: ComplianceCriteria = DEFAULT_CRITERIA) -> bool:
    fmt = (container_format or "").lower()
    mime = (mime_type or "").lower()
    return any(token.lower() in fmt or token.lower() in mime for token in criteria.allowed_container_tokens)


def evaluate_compliance(
    descriptor: VideoDescriptor,
    criteria: ComplianceCriteria = DEFAULT_CRITERIA,
) -> ComplianceVerdict:
    """Evaluate every criterion. Never raises; a missing value is simply invalid."""
    resolution = CriterionResult(
        valid=(descriptor.width, descriptor.height) in {tuple(r) for r in criteria.allowed_resolutions},
        value=f"{descriptor.width}×{descriptor.height}",
        requirement=criteria.resolution_requirement,
    )
    container = CriterionResult(
        valid=is_format_allowed(descriptor.container_format, descriptor.mime_type, criteria),
        value=format_display_name(descriptor.container_format, descriptor.mime_type),
        requirement=criteria.format_requirement,
    )
    file_size = CriterionResult(
        valid=descriptor.file_size <= criteria.max_file_size,
        value=format_file_size(descriptor.file_size),
        requirement=criteria.file_size_requirement,
    )
    frame_rate = CriterionResult(
        valid=_within(descriptor.frame_rate, criteria.target_frame_rate, criteria.frame_rate_tolerance),
        value=f"{format_number(descriptor.frame_rate)} fps",
        requirement=criteria.frame_rate_requirement,
    )
    frame_count = CriterionResult(
        valid=abs(descriptor.frame_count - criteria.target_frame_count) <= criteria.frame_count_tolerance,
        value=str(descriptor.frame_count),
        requirement=criteria.frame_count_requirement,
    )

    codec_ok = is_codec_allowed(descriptor.codec_name, criteria)
    logger.debug("Codec validation: %r -> %s", descriptor.codec_name, "VALID" if codec_ok else "INVALID")
    codec = CriterionResult(
        valid=codec_ok,
        value=codec_display_name(descriptor.codec_name),
        requirement=criteria.codec_requirement,
    )

    results = (resolution, container, file_size, frame_rate, frame_count, codec)
    return ComplianceVerdict(
        resolution=resolution,
        format=container,
        file_size=file_size,
        frame_rate=frame_rate,
        frame_count=frame_count,
        codec=codec,
        overall=all(r.valid for r in results),
    )
