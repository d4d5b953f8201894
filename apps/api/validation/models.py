"""
Validation models and schemas.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UploadInfo(BaseModel):
    """What the upload layer knows about the file before probing."""
    file_name: str
    file_size: int = Field(ge=0)
    mime_type: str = ""


class VideoDescriptor(BaseModel):
    """Normalized technical properties of one uploaded video."""
    model_config = ConfigDict(frozen=True)

    duration_seconds: float = Field(ge=0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    frame_rate: float = Field(gt=0)  # rounded to 2 decimals
    frame_count: int = Field(ge=0)
    codec_name: str
    profile: Optional[str] = None
    container_format: str  # may be "mov,mp4,m4a,3gp,3g2,mj2"
    bit_rate: Optional[int] = None  # bps
    file_size: int = Field(ge=0)
    mime_type: str = ""
    file_name: str = ""

    @property
    def display_duration(self) -> float:
        return round(self.duration_seconds, 2)


class ComplianceCriteria(BaseModel):
    """One contest's rule set. Immutable; pass a different instance to change rules."""
    model_config = ConfigDict(frozen=True)

    allowed_resolutions: Tuple[Tuple[int, int], ...] = ((1920, 810), (3840, 1620))
    target_frame_rate: float = 24.0
    frame_rate_tolerance: float = 0.1
    target_frame_count: int = 144
    frame_count_tolerance: int = 2
    max_file_size: int = 100 * 1024 * 1024
    allowed_container_tokens: Tuple[str, ...] = ("mp4", "mov", "quicktime")
    allowed_codec_tokens: Tuple[str, ...] = ("h264", "avc", "hevc", "h265")

    resolution_requirement: str = "1920×810 or 3840×1620"
    format_requirement: str = "MP4 or MOV"
    file_size_requirement: str = "< 100MB"
    frame_rate_requirement: str = "24 fps"
    frame_count_requirement: str = "144 frames"
    codec_requirement: str = "H.264 or H.265"


DEFAULT_CRITERIA = ComplianceCriteria()


class CriterionResult(BaseModel):
    valid: bool
    value: str
    requirement: str


class ComplianceVerdict(BaseModel):
    """Per-criterion results plus the overall decision."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    resolution: CriterionResult
    format: CriterionResult
    file_size: CriterionResult
    frame_rate: CriterionResult
    frame_count: CriterionResult
    codec: CriterionResult
    overall: bool

    def criteria(self) -> List[Tuple[str, CriterionResult]]:
        """(wire key, result) pairs in display order."""
        return [
            ("resolution", self.resolution),
            ("format", self.format),
            ("fileSize", self.file_size),
            ("frameRate", self.frame_rate),
            ("frameCount", self.frame_count),
            ("codec", self.codec),
        ]


class ReportRow(BaseModel):
    key: str
    label: str
    requirement: str
    value: str
    valid: bool
    icon: str


class ReportDetail(BaseModel):
    label: str
    value: str


class OverallStatus(BaseModel):
    valid: bool
    icon: str
    message: str


class ComplianceReport(BaseModel):
    """Rendering-ready view of a verdict."""
    overall: OverallStatus
    rows: List[ReportRow]
    details: List[ReportDetail]
