"""
Videos Store - In-memory collection of video records.

The store owns every video. Callers only ever receive copies, so a record
can change only through create/update/delete. Every operation holds the
store lock for its whole duration.
"""

import copy
import itertools
import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from videoapi.core.exceptions import VideoNotFoundError, VideoValidationError
from videoapi.core.models import MUTABLE_VIDEO_FIELDS, PROTECTED_VIDEO_FIELDS
from videoapi.core.validator import validate_video

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with milliseconds and a Z suffix."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class VideosStore:
    """
    Store for video metadata.

    Provides CRUD operations over a list kept in insertion order.
    Ids come from a counter and are never reused, even after a delete.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        publication_delay: timedelta = timedelta(hours=24),
    ):
        self._videos: list[dict[str, Any]] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._clock = clock
        self._publication_delay = publication_delay

    def list(self) -> list[dict[str, Any]]:
        """Get all videos in insertion order."""
        with self._lock:
            return copy.deepcopy(self._videos)

    def count(self) -> int:
        """Count stored videos."""
        with self._lock:
            return len(self._videos)

    def get(self, video_id: int) -> dict[str, Any]:
        """
        Get a video by ID.

        Raises:
            VideoNotFoundError: No video has this id
        """
        with self._lock:
            return copy.deepcopy(self._videos[self._index_of(video_id)])

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Validate a payload and store it as a new video.

        Args:
            payload: Client-supplied fields (camelCase keys)

        Returns:
            The stored video

        Raises:
            VideoValidationError: The payload broke one or more field rules
        """
        errors = validate_video(payload)
        if errors:
            raise VideoValidationError(errors)

        with self._lock:
            now = self._clock()
            video = {
                "id": next(self._ids),
                "title": payload["title"],
                "author": payload["author"],
                "canBeDownloaded": payload.get("canBeDownloaded") or False,
                "minAgeRestriction": payload.get("minAgeRestriction"),
                "createdAt": format_timestamp(now),
                "publicationDate": format_timestamp(now + self._publication_delay),
                "availableResolutions": list(payload.get("availableResolutions") or []),
            }
            self._videos.append(video)
            logger.info(f"Created video {video['id']}: {video['title']!r}")
            return copy.deepcopy(video)

    def update(self, video_id: int, payload: dict[str, Any]) -> None:
        """
        Validate a payload and merge it over an existing video.

        Payload fields replace the stored ones wholesale. Protected fields
        and keys that are not video fields are ignored.

        Raises:
            VideoValidationError: The payload broke one or more field rules
            VideoNotFoundError: No video has this id
        """
        errors = validate_video(payload)
        if errors:
            raise VideoValidationError(errors)

        with self._lock:
            index = self._index_of(video_id)

            protected = sorted(key for key in payload if key in PROTECTED_VIDEO_FIELDS)
            if protected:
                logger.debug(f"Ignoring protected fields in update of video {video_id}: {protected}")
            unknown = sorted(
                key for key in payload
                if key not in MUTABLE_VIDEO_FIELDS and key not in PROTECTED_VIDEO_FIELDS
            )
            if unknown:
                logger.debug(f"Ignoring unknown fields in update of video {video_id}: {unknown}")

            changes = {
                key: copy.deepcopy(value)
                for key, value in payload.items()
                if key in MUTABLE_VIDEO_FIELDS
            }
            self._videos[index] = {**self._videos[index], **changes}
            logger.info(f"Updated video {video_id}: {sorted(changes)}")

    def delete(self, video_id: int) -> None:
        """
        Delete a video by ID.

        Raises:
            VideoNotFoundError: No video has this id
        """
        with self._lock:
            video = self._videos.pop(self._index_of(video_id))
            logger.info(f"Deleted video {video['id']}")

    def _index_of(self, video_id: int) -> int:
        # Caller must hold the lock
        for index, video in enumerate(self._videos):
            if video["id"] == video_id:
                return index
        raise VideoNotFoundError(video_id)
