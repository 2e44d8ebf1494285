"""Storage layer for application events."""

from mindlog.storage.event_store import EventStore

__all__ = ["EventStore"]
