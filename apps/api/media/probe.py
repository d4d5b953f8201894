import asyncio
import json
import logging
import shutil
import subprocess
from typing import Any, Dict, List, Optional

import ffmpeg

from config import settings
from errors import ProbeError

logger = logging.getLogger(__name__)

# Extra time the event loop waits beyond the subprocess timeout before giving up.
_WAIT_GRACE_SECONDS = 2.0


def is_ffprobe_available(cmd: Optional[str] = None) -> bool:
    return shutil.which(cmd or settings.FFPROBE_CMD) is not None


def build_probe_args(video_path: str, cmd: Optional[str] = None) -> List[str]:
    """Same invocation as ``ffmpeg.probe``: full format and stream sections as JSON."""
    return [cmd or settings.FFPROBE_CMD, "-show_format", "-show_streams", "-of", "json", video_path]


def _run_ffprobe(video_path: str, timeout: Optional[float]) -> Dict[str, Any]:
    # subprocess.run kills the child when the timeout expires
    result = subprocess.run(
        build_probe_args(video_path),
        capture_output=True,
        timeout=timeout,
    )
    if result.returncode != 0:
        raise ffmpeg.Error("ffprobe", result.stdout, result.stderr)
    return json.loads(result.stdout.decode("utf-8"))


def probe_video(video_path: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """
    Run ffprobe on a local file and return its JSON document
    (``format`` and ``streams``). Raises ProbeError on any failure,
    including when ffprobe runs longer than ``timeout`` seconds.
    """
    try:
        return _run_ffprobe(video_path, timeout)
    except ffmpeg.Error as e:
        detail = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else str(e)
        logger.error("ffprobe failed for %s: %s", video_path, detail)
        raise ProbeError(f"FFprobe error: {detail or 'unknown failure'}") from e
    except subprocess.TimeoutExpired as e:
        logger.error("ffprobe timed out after %ss for %s", timeout, video_path)
        raise ProbeError(f"FFprobe timed out after {timeout:g}s") from e
    except FileNotFoundError as e:
        raise ProbeError("ffprobe not found. Install FFmpeg on the server.") from e
    except OSError as e:
        raise ProbeError(f"Could not run ffprobe: {e}") from e
    except ValueError as e:
        # ffprobe exited cleanly but did not print valid JSON
        raise ProbeError(f"FFprobe returned unreadable output: {e}") from e


async def probe_video_async(video_path: str, timeout: Optional[float] = None) -> Dict[str, Any]:
    """Probe in a worker thread so the event loop keeps serving other uploads."""
    if timeout is None:
        timeout = float(settings.PROBE_TIMEOUT_SECONDS)
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(probe_video, video_path, timeout),
            timeout=timeout + _WAIT_GRACE_SECONDS,
        )
    except asyncio.TimeoutError as e:
        logger.error("ffprobe did not return within %ss for %s", timeout, video_path)
        raise ProbeError(f"FFprobe timed out after {timeout:g}s") from e
