"""Core domain models and contracts for the Videos API.

Videos themselves are stored as plain dicts keyed by their wire (camelCase)
field names; the models here cover the closed vocabularies and the error
envelope returned to clients.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class VideoQuality(str, Enum):
    """Allowed values for a video's availableResolutions."""

    P144 = "144p"
    P240 = "240p"
    P360 = "360p"
    P480 = "480p"
    P720 = "720p"
    P1080 = "1080p"
    P1440 = "1440p"
    P2160 = "2160p"


# =============================================================================
# Video fields
# =============================================================================


# Fields a client may change through an update
MUTABLE_VIDEO_FIELDS = frozenset([
    "title",
    "author",
    "canBeDownloaded",
    "minAgeRestriction",
    "availableResolutions",
])

# Fields owned by the store, never taken from a payload
PROTECTED_VIDEO_FIELDS = frozenset([
    "id",
    "createdAt",
    "publicationDate",
])


# =============================================================================
# Error envelope
# =============================================================================


class FieldError(BaseModel):
    """A single error entry as returned to API clients."""

    message: str
    field: str


class APIErrorResult(BaseModel):
    """Error envelope for 4xx responses."""

    errorsMessages: list[FieldError] = Field(default_factory=list)

    @classmethod
    def for_field(cls, field: str, messages: list[str]) -> "APIErrorResult":
        """Build an envelope tagging every message with the same field."""
        return cls(errorsMessages=[FieldError(message=m, field=field) for m in messages])
