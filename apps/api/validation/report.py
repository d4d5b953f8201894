"""
Rendering-ready summary of a compliance verdict.
"""

from typing import List

from .evaluator import format_number
from .models import (
    ComplianceReport,
    ComplianceVerdict,
    OverallStatus,
    ReportDetail,
    ReportRow,
    VideoDescriptor,
)

PASS_ICON = "✅"
FAIL_ICON = "❌"
COMPLIANT_ICON = "🎉"

COMPLIANT_MESSAGE = "Video COMPLIANT with contest rules!"
NOT_COMPLIANT_MESSAGE = "Video NOT COMPLIANT - See details above"

CRITERION_LABELS = {
    "resolution": "Resolution",
    "format": "Format",
    "fileSize": "File Size",
    "frameRate": "Frame Rate",
    "frameCount": "Frame Count",
    "codec": "Codec",
}


def _details(verdict: ComplianceVerdict, descriptor: VideoDescriptor) -> List[ReportDetail]:
    details = [
        ReportDetail(label="File Name", value=descriptor.file_name),
        ReportDetail(label="File Size", value=verdict.file_size.value),
        ReportDetail(label="Exact Duration", value=f"{format_number(descriptor.display_duration)}s"),
        ReportDetail(label="Resolution", value=f"{descriptor.width}×{descriptor.height}px"),
        ReportDetail(label="Exact Frame Rate", value=f"{format_number(descriptor.frame_rate)} fps"),
        ReportDetail(label="Exact Frame Count", value=f"{descriptor.frame_count} frames"),
        ReportDetail(label="Codec", value=descriptor.codec_name),
        ReportDetail(label="Container Format", value=descriptor.container_format),
    ]
    if descriptor.bit_rate:
        details.append(ReportDetail(label="Bitrate", value=f"{round(descriptor.bit_rate / 1000)} kbps"))
    return details


def build_report(verdict: ComplianceVerdict, descriptor: VideoDescriptor) -> ComplianceReport:
    rows = [
        ReportRow(
            key=key,
            label=CRITERION_LABELS[key],
            requirement=result.requirement,
            value=result.value,
            valid=result.valid,
            icon=PASS_ICON if result.valid else FAIL_ICON,
        )
        for key, result in verdict.criteria()
    ]
    overall = OverallStatus(
        valid=verdict.overall,
        icon=COMPLIANT_ICON if verdict.overall else FAIL_ICON,
        message=COMPLIANT_MESSAGE if verdict.overall else NOT_COMPLIANT_MESSAGE,
    )
    return ComplianceReport(overall=overall, rows=rows, details=_details(verdict, descriptor))
