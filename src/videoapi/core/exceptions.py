"""Errors raised by the Videos API core."""


class VideoAPIError(Exception):
    """Base class for all Videos API errors."""


class VideoValidationError(VideoAPIError):
    """A create or update payload failed validation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class VideoNotFoundError(VideoAPIError):
    """No video exists with the requested id."""

    def __init__(self, video_id: object):
        self.video_id = video_id
        super().__init__(f"Video not found: {video_id}")
