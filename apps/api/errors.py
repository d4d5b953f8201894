"""
Request-terminal error types.

Every failure that ends an analysis request inherits from VideoCheckError and
carries the HTTP status it maps to.
"""


class VideoCheckError(Exception):
    """Base exception for all video-check failures."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UploadError(VideoCheckError):
    """Raised when an upload is rejected before analysis (type, size, missing file)."""

    def __init__(self, message: str, status_code: int = 400):
        self.status_code = status_code
        super().__init__(message)


class ProbeError(VideoCheckError):
    """Raised when ffprobe fails, is missing, or times out."""

    status_code = 502


class MetadataError(VideoCheckError):
    """Raised when probe output cannot be normalized into a descriptor."""

    status_code = 422
