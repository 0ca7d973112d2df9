"""Tests for the Videos Store."""

from datetime import datetime, timedelta, timezone

import pytest

from videoapi.core.exceptions import VideoNotFoundError, VideoValidationError
from videoapi.storage import VideosStore, format_timestamp


FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)


@pytest.fixture
def store() -> VideosStore:
    """Create a store with a fixed clock."""
    return VideosStore(clock=lambda: FIXED_NOW)


def make_payload(title: str = "A", **overrides) -> dict:
    """Create a valid video payload."""
    payload = {
        "title": title,
        "author": "B",
        "availableResolutions": ["720p"],
    }
    payload.update(overrides)
    return payload


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=timezone.utc)


class TestFormatTimestamp:
    """Test timestamp rendering."""

    def test_milliseconds_and_z_suffix(self) -> None:
        assert format_timestamp(FIXED_NOW) == "2024-01-15T10:30:00.123Z"

    def test_converts_to_utc(self) -> None:
        local = FIXED_NOW.astimezone(timezone(timedelta(hours=3)))

        assert format_timestamp(local) == "2024-01-15T10:30:00.123Z"


class TestVideosStoreCreate:
    """Test video creation."""

    def test_create_applies_defaults(self, store: VideosStore) -> None:
        """Minimal valid payload gets defaults and timestamps."""
        video = store.create(make_payload())

        assert video["title"] == "A"
        assert video["author"] == "B"
        assert video["availableResolutions"] == ["720p"]
        assert video["canBeDownloaded"] is False
        assert video["minAgeRestriction"] is None
        assert video["createdAt"] == "2024-01-15T10:30:00.123Z"
        assert parse_timestamp(video["publicationDate"]) - parse_timestamp(
            video["createdAt"]
        ) == timedelta(hours=24)

    def test_create_keeps_optional_fields(self, store: VideosStore) -> None:
        video = store.create(make_payload(canBeDownloaded=True, minAgeRestriction=16))

        assert video["canBeDownloaded"] is True
        assert video["minAgeRestriction"] == 16

    def test_create_ignores_client_id_and_timestamps(self, store: VideosStore) -> None:
        video = store.create(make_payload(id=999, createdAt="1999-01-01T00:00:00.000Z"))

        assert video["id"] != 999
        assert video["createdAt"] == "2024-01-15T10:30:00.123Z"

    def test_ids_are_unique(self, store: VideosStore) -> None:
        for i in range(20):
            store.create(make_payload(title=f"Video {i}"))

        ids = [video["id"] for video in store.list()]
        assert len(set(ids)) == 20

    def test_ids_not_reused_after_delete(self, store: VideosStore) -> None:
        first = store.create(make_payload())
        store.delete(first["id"])

        second = store.create(make_payload())

        assert second["id"] != first["id"]

    def test_custom_publication_delay(self) -> None:
        store = VideosStore(clock=lambda: FIXED_NOW, publication_delay=timedelta(hours=1))

        video = store.create(make_payload())

        assert video["publicationDate"] == "2024-01-15T11:30:00.123Z"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": ""},
            {"title": "x" * 41},
            {"author": ""},
            {"author": "x" * 21},
            {"availableResolutions": ["720p", "4k"]},
        ],
    )
    def test_invalid_create_leaves_store_unchanged(self, store: VideosStore, overrides: dict) -> None:
        store.create(make_payload())

        with pytest.raises(VideoValidationError) as exc_info:
            store.create(make_payload(**overrides))

        assert len(exc_info.value.errors) == 1
        assert store.count() == 1

    def test_validation_error_lists_all_messages(self, store: VideosStore) -> None:
        with pytest.raises(VideoValidationError) as exc_info:
            store.create({})

        assert exc_info.value.errors == [
            "title is required.",
            "author is required.",
            "availableResolutions is required.",
        ]


class TestVideosStoreRead:
    """Test list and get."""

    def test_empty_store(self, store: VideosStore) -> None:
        assert store.list() == []
        assert store.count() == 0

    def test_get_existing(self, store: VideosStore) -> None:
        created = store.create(make_payload())

        assert store.get(created["id"]) == created

    def test_get_nonexistent(self, store: VideosStore) -> None:
        created = store.create(make_payload())

        with pytest.raises(VideoNotFoundError) as exc_info:
            store.get(created["id"] + 1000)

        assert exc_info.value.video_id == created["id"] + 1000

    def test_returned_videos_are_copies(self, store: VideosStore) -> None:
        """Mutating a returned video must not touch the store."""
        created = store.create(make_payload())
        created["title"] = "changed"
        created["availableResolutions"].append("144p")

        listed = store.list()
        listed[0]["author"] = "changed"

        stored = store.get(created["id"])
        assert stored["title"] == "A"
        assert stored["author"] == "B"
        assert stored["availableResolutions"] == ["720p"]

    def test_list_after_delete_keeps_order(self, store: VideosStore) -> None:
        """N creates and one delete leave N-1 videos in insertion order."""
        created = [store.create(make_payload(title=f"Video {i}")) for i in range(5)]

        store.delete(created[2]["id"])

        titles = [video["title"] for video in store.list()]
        assert titles == ["Video 0", "Video 1", "Video 3", "Video 4"]


class TestVideosStoreUpdate:
    """Test partial-update merge."""

    def test_update_merges_fields(self, store: VideosStore) -> None:
        created = store.create(make_payload(minAgeRestriction=12))

        result = store.update(
            created["id"],
            {"title": "New", "author": "Other", "availableResolutions": ["1080p", "144p"]},
        )

        assert result is None
        updated = store.get(created["id"])
        assert updated["title"] == "New"
        assert updated["author"] == "Other"
        assert updated["availableResolutions"] == ["1080p", "144p"]
        assert updated["minAgeRestriction"] == 12
        assert updated["canBeDownloaded"] is False
        assert updated["createdAt"] == created["createdAt"]

    def test_update_optional_fields(self, store: VideosStore) -> None:
        created = store.create(make_payload())

        store.update(created["id"], make_payload(canBeDownloaded=True, minAgeRestriction=None))

        updated = store.get(created["id"])
        assert updated["canBeDownloaded"] is True
        assert updated["minAgeRestriction"] is None

    def test_update_protects_identity_and_timestamps(self, store: VideosStore) -> None:
        created = store.create(make_payload())

        store.update(
            created["id"],
            make_payload(
                id=12345,
                createdAt="1999-01-01T00:00:00.000Z",
                publicationDate="1999-01-02T00:00:00.000Z",
                extra="ignored",
            ),
        )

        updated = store.get(created["id"])
        assert updated["id"] == created["id"]
        assert updated["createdAt"] == created["createdAt"]
        assert updated["publicationDate"] == created["publicationDate"]
        assert "extra" not in updated

    def test_update_nonexistent(self, store: VideosStore) -> None:
        created = store.create(make_payload())

        with pytest.raises(VideoNotFoundError):
            store.update(created["id"] + 1000, make_payload(title="New"))

        assert store.list() == [created]

    def test_invalid_update_leaves_video_unchanged(self, store: VideosStore) -> None:
        created = store.create(make_payload())

        with pytest.raises(VideoValidationError):
            store.update(created["id"], make_payload(title="x" * 41))

        assert store.get(created["id"]) == created

    def test_validation_precedes_existence_check(self, store: VideosStore) -> None:
        """An invalid payload is rejected even for an unknown id."""
        with pytest.raises(VideoValidationError):
            store.update(999, {"title": ""})


class TestVideosStoreDelete:
    """Test deletion."""

    def test_delete_twice(self, store: VideosStore) -> None:
        created = store.create(make_payload())

        store.delete(created["id"])

        with pytest.raises(VideoNotFoundError):
            store.delete(created["id"])

    def test_delete_nonexistent_leaves_store_unchanged(self, store: VideosStore) -> None:
        store.create(make_payload())

        with pytest.raises(VideoNotFoundError):
            store.delete(999)

        assert store.count() == 1
