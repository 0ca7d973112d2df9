"""Videos API - in-memory video metadata service."""

__version__ = "0.1.0"
