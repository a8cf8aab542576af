"""Exception taxonomy for the protocol lifecycle.

``ProtocolNotFoundError`` and ``InvalidStateError`` are expected business
conditions and map to 404 / 400.  ``WebhookTransportError`` never leaves the
dispatcher; it is degraded to a ``DispatchResult``.  ``StoreError`` wraps
backend failures and maps to 500.
"""
from __future__ import annotations


class ProtocolNotFoundError(KeyError):
    """Raised when a protocol id is unknown to the store."""

    def __init__(self, protocol_id: str) -> None:
        super().__init__(protocol_id)
        self.protocol_id = protocol_id

    def __str__(self) -> str:
        return f"Protocol {self.protocol_id} not found"


class InvalidStateError(ValueError):
    """Raised when completing a protocol that is no longer open."""

    def __init__(self, protocol_id: str, current_status: str) -> None:
        super().__init__(
            f"Protocol {protocol_id} is {current_status!r}, expected an open status"
        )
        self.protocol_id = protocol_id
        self.current_status = current_status


class WebhookTransportError(ConnectionError):
    """Raised when the webhook POST fails before an HTTP response arrives."""


class StoreError(RuntimeError):
    """Raised when a storage backend read or write fails."""
