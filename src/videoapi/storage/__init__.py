"""Videos API Storage Layer - In-memory video collection."""

from videoapi.storage.videos import VideosStore, format_timestamp

__all__ = ["VideosStore", "format_timestamp"]
