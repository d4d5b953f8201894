import pytest

from main import app
from routers.video import get_criteria


@pytest.fixture(autouse=True)
def isolated_temp_dir(tmp_path, monkeypatch):
    """Point upload temp files at a per-test directory and reset overrides."""
    temp_dir = tmp_path / "uploads"
    monkeypatch.setattr("config.settings.UPLOAD_TEMP_DIR", str(temp_dir))
    yield temp_dir
    app.dependency_overrides.pop(get_criteria, None)


@pytest.fixture
def compliant_probe():
    return {
        "format": {
            "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
            "duration": "6.000000",
            "bit_rate": "8123456",
        },
        "streams": [
            {
                "codec_type": "video",
                "codec_name": "h264",
                "profile": "High",
                "width": 1920,
                "height": 810,
                "r_frame_rate": "24/1",
                "nb_frames": "144",
            },
            {"codec_type": "audio", "codec_name": "aac"},
        ],
    }
