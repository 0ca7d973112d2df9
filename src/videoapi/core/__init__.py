"""Videos API core - domain models, errors and validation."""

from videoapi.core.exceptions import (
    VideoAPIError,
    VideoNotFoundError,
    VideoValidationError,
)
from videoapi.core.models import (
    MUTABLE_VIDEO_FIELDS,
    PROTECTED_VIDEO_FIELDS,
    APIErrorResult,
    FieldError,
    VideoQuality,
)

__all__ = [
    "APIErrorResult",
    "FieldError",
    "MUTABLE_VIDEO_FIELDS",
    "PROTECTED_VIDEO_FIELDS",
    "VideoAPIError",
    "VideoNotFoundError",
    "VideoQuality",
    "VideoValidationError",
]
