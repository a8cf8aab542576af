"""ProtocolStore contract.

Two backends implement it: :class:`~protocol_webhook.store.memory.MemoryProtocolStore`
and :class:`~protocol_webhook.store.sql.SqlProtocolStore`.  Callers go through
this interface only; ``backend`` is the one place the active variant shows.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from protocol_webhook.store.records import Protocol, User

STATUS_OPEN = "open"
STATUS_CLOSED = "closed"

OPEN_STATUSES: frozenset[str] = frozenset({STATUS_OPEN})


def is_open_status(status: str | None) -> bool:
    """Return ``True`` if *status* is an open (actionable) protocol status."""
    return status in OPEN_STATUSES


class ProtocolStore(ABC):
    """Read, query and mutate protocol and user records."""

    #: Capability label reported by the health endpoint.
    backend: str

    def init(self) -> None:
        """Prepare the backend; the default seeds via :meth:`reset`."""
        self.reset()

    @abstractmethod
    def get_users(self) -> list[User]:
        """Return all users in seed order."""

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        """Return the user with *user_id*, or ``None``."""

    @abstractmethod
    def get_protocols(
        self,
        user_id: str | None = None,
        status: str | None = None,
    ) -> list[Protocol]:
        """Return protocols matching every given filter, in seed order."""

    @abstractmethod
    def get_protocol_by_id(self, protocol_id: str) -> Protocol | None:
        """Return the protocol with *protocol_id*, or ``None``."""

    @abstractmethod
    def count_open_for_user(self, user_id: str) -> int:
        """Return how many protocols assigned to *user_id* are open."""

    @abstractmethod
    def update_protocol_status(
        self,
        protocol_id: str,
        new_status: str,
        completed_at: str | None,
    ) -> None:
        """Set status and completion timestamp unconditionally.

        Raises ``ProtocolNotFoundError`` if *protocol_id* is unknown.
        """

    @abstractmethod
    def close_if_open(self, protocol_id: str, completed_at: str) -> bool:
        """Atomically close the protocol if it is still open.

        Returns ``False`` (and changes nothing) when the protocol is already in
        a terminal status.  Raises ``ProtocolNotFoundError`` if *protocol_id*
        is unknown.
        """

    @abstractmethod
    def reset(self) -> int:
        """Restore the seed data set and return the protocol count."""
