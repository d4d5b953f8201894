import pytest

from validation.evaluator import (
    codec_display_name,
    evaluate_compliance,
    format_display_name,
    format_file_size,
)
from validation.models import ComplianceCriteria, VideoDescriptor


def make_descriptor(**overrides) -> VideoDescriptor:
    fields = {
        "duration_seconds": 6.0,
        "width": 1920,
        "height": 810,
        "frame_rate": 24.0,
        "frame_count": 144,
        "codec_name": "h264",
        "container_format": "mov,mp4,m4a,3gp,3g2,mj2",
        "bit_rate": 8_000_000,
        "file_size": 50 * 1024 * 1024,
        "mime_type": "video/mp4",
        "file_name": "entry.mp4",
    }
    fields.update(overrides)
    return VideoDescriptor(**fields)


def test_compliant_video_passes_everything():
    verdict = evaluate_compliance(make_descriptor())
    assert verdict.overall is True
    assert all(result.valid for _, result in verdict.criteria())


@pytest.mark.parametrize(
    "width,height,expected",
    [
        (1920, 810, True),
        (3840, 1620, True),
        (1920, 1080, False),
        (810, 1920, False),
        (3840, 2160, False),
        (1921, 810, False),
    ],
)
def test_resolution_requires_exact_pair(width, height, expected):
    verdict = evaluate_compliance(make_descriptor(width=width, height=height))
    assert verdict.resolution.valid is expected
    assert verdict.resolution.value == f"{width}×{height}"
    assert verdict.resolution.requirement == "1920×810 or 3840×1620"


@pytest.mark.parametrize(
    "size,expected",
    [
        (104857600, True),
        (104857601, False),
        (0, True),
    ],
)
def test_file_size_boundary_is_inclusive(size, expected):
    verdict = evaluate_compliance(make_descriptor(file_size=size))
    assert verdict.file_size.valid is expected
    assert verdict.file_size.requirement == "< 100MB"


@pytest.mark.parametrize(
    "fps,expected",
    [
        (24.0, True),
        (23.9, True),
        (23.89, False),
        (24.1, True),
        (24.11, False),
        (23.98, True),
        (25.0, False),
    ],
)
def test_frame_rate_tolerance(fps, expected):
    verdict = evaluate_compliance(make_descriptor(frame_rate=fps))
    assert verdict.frame_rate.valid is expected
    assert verdict.frame_rate.requirement == "24 fps"


def test_frame_rate_display():
    assert evaluate_compliance(make_descriptor(frame_rate=24.0)).frame_rate.value == "24 fps"
    assert evaluate_compliance(make_descriptor(frame_rate=23.98)).frame_rate.value == "23.98 fps"


@pytest.mark.parametrize(
    "count,expected",
    [
        (144, True),
        (142, True),
        (141, False),
        (146, True),
        (147, False),
        (0, False),
    ],
)
def test_frame_count_tolerance(count, expected):
    verdict = evaluate_compliance(make_descriptor(frame_count=count))
    assert verdict.frame_count.valid is expected
    assert verdict.frame_count.value == str(count)
    assert verdict.frame_count.requirement == "144 frames"


@pytest.mark.parametrize(
    "codec,expected_valid,expected_display",
    [
        ("h264", True, "H.264"),
        ("avc1", True, "H.264"),
        ("hevc", True, "H.265"),
        ("hvc1", True, "H.265"),
        ("hev1", True, "H.265"),
        ("H265", True, "H.265"),
        ("vp9", False, "VP9"),
        ("prores", False, "PRORES"),
        ("", False, ""),
    ],
)
def test_codec_rules_and_display(codec, expected_valid, expected_display):
    verdict = evaluate_compliance(make_descriptor(codec_name=codec))
    assert verdict.codec.valid is expected_valid
    assert verdict.codec.value == expected_display
    assert verdict.codec.requirement == "H.264 or H.265"


def test_codec_aliases_pass_even_when_not_configured():
    criteria = ComplianceCriteria(allowed_codec_tokens=("h264",))
    assert evaluate_compliance(make_descriptor(codec_name="hevc"), criteria).codec.valid is True
    assert evaluate_compliance(make_descriptor(codec_name="avc1"), criteria).codec.valid is True
    assert evaluate_compliance(make_descriptor(codec_name="av1"), criteria).codec.valid is False


@pytest.mark.parametrize(
    "container,mime,expected_valid,expected_display",
    [
        ("mov,mp4,m4a,3gp,3g2,mj2", "video/mp4", True, "MP4"),
        ("mov,mp4,m4a,3gp,3g2,mj2", "video/quicktime", True, "MP4"),
        ("quicktime", "application/octet-stream", True, "MOV"),
        ("avi", "video/quicktime", True, "MOV"),
        ("avi", "video/x-msvideo", False, "AVI"),
        ("matroska,webm", "video/webm", False, "MATROSKA,WEBM"),
    ],
)
def test_container_format_rules(container, mime, expected_valid, expected_display):
    verdict = evaluate_compliance(make_descriptor(container_format=container, mime_type=mime))
    assert verdict.format.valid is expected_valid
    assert verdict.format.value == expected_display
    assert verdict.format.requirement == "MP4 or MOV"


def test_container_tokens_match_case_insensitively():
    criteria = ComplianceCriteria(allowed_container_tokens=("MP4",))
    verdict = evaluate_compliance(make_descriptor(container_format="mov,mp4,m4a,3gp,3g2,mj2", mime_type="video/mp4"), criteria)
    assert verdict.format.valid is True


def test_only_oversized_file_fails_overall():
    verdict = evaluate_compliance(make_descriptor(file_size=200 * 1024 * 1024))
    assert verdict.overall is False
    failing = [key for key, result in verdict.criteria() if not result.valid]
    assert failing == ["fileSize"]
    assert verdict.file_size.value == "200 MB"


def test_custom_criteria_replace_defaults():
    criteria = ComplianceCriteria(
        allowed_resolutions=((1280, 720),),
        target_frame_rate=30.0,
        target_frame_count=180,
    )
    verdict = evaluate_compliance(
        make_descriptor(width=1280, height=720, frame_rate=29.97, frame_count=180),
        criteria,
    )
    assert verdict.resolution.valid
    assert verdict.frame_rate.valid
    assert verdict.frame_count.valid
    # defaults untouched
    assert evaluate_compliance(make_descriptor(width=1280, height=720)).resolution.valid is False


def test_verdict_serializes_with_wire_keys():
    payload = evaluate_compliance(make_descriptor()).model_dump(by_alias=True)
    assert set(payload) == {"resolution", "format", "fileSize", "frameRate", "frameCount", "codec", "overall"}
    assert payload["fileSize"] == {"valid": True, "value": "50 MB", "requirement": "< 100MB"}


def test_evaluation_is_deterministic():
    descriptor = make_descriptor(frame_rate=23.98, codec_name="avc1")
    assert evaluate_compliance(descriptor) == evaluate_compliance(descriptor)


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (157286400, "150 MB"),
        (1073741824, "1 GB"),
        (5 * 1024 ** 4, "5120 GB"),
    ],
)
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_display_helpers():
    assert codec_display_name("AVC") == "H.264"
    assert format_display_name("mp4", "") == "MP4"
    assert format_display_name("mpegts", "video/mp2t") == "MPEGTS"
