"""Video metadata normalization and contest compliance checks."""

from .evaluator import evaluate_compliance, format_file_size
from .models import (
    ComplianceCriteria,
    ComplianceReport,
    ComplianceVerdict,
    CriterionResult,
    DEFAULT_CRITERIA,
    UploadInfo,
    VideoDescriptor,
)
from .normalizer import normalize_probe, parse_frame_rate
from .report import build_report
