"""Protocol and user persistence.

``create_store()`` picks the backend: a relational store when a database URL
is configured, the in-memory store otherwise.
"""
from __future__ import annotations

from protocol_webhook.store.base import (
    OPEN_STATUSES,
    STATUS_CLOSED,
    STATUS_OPEN,
    ProtocolStore,
    is_open_status,
)
from protocol_webhook.store.memory import MemoryProtocolStore
from protocol_webhook.store.records import ChecklistItem, Protocol, Section, User
from protocol_webhook.store.sql import SqlProtocolStore


def create_store(database_url: str | None) -> ProtocolStore:
    """Return an uninitialised store for *database_url* (``None`` → memory)."""
    if database_url:
        return SqlProtocolStore.from_url(database_url)
    return MemoryProtocolStore()


def backend_label(database_url: str | None) -> str:
    """Capability label of the store *database_url* selects, without connecting."""
    return SqlProtocolStore.backend if database_url else MemoryProtocolStore.backend


__all__ = [
    "OPEN_STATUSES",
    "STATUS_CLOSED",
    "STATUS_OPEN",
    "ChecklistItem",
    "MemoryProtocolStore",
    "Protocol",
    "ProtocolStore",
    "Section",
    "SqlProtocolStore",
    "User",
    "backend_label",
    "create_store",
    "is_open_status",
]
