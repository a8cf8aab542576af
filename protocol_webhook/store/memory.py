"""In-memory ProtocolStore: ephemeral, reset on every process start."""
from __future__ import annotations

import dataclasses
import logging
import threading

from protocol_webhook.core.errors import ProtocolNotFoundError
from protocol_webhook.store.base import STATUS_CLOSED, ProtocolStore, is_open_status
from protocol_webhook.store.records import Protocol, User
from protocol_webhook.store.seed import seed_protocols, seed_users

logger = logging.getLogger(__name__)


class MemoryProtocolStore(ProtocolStore):
    """Dict-backed store; every read and write happens under one lock."""

    backend = "memory"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: list[User] = []
        # Insertion order is the seed order.
        self._protocols: dict[str, Protocol] = {}

    # -- reads --------------------------------------------------------------

    def get_users(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def get_user(self, user_id: str) -> User | None:
        with self._lock:
            return next((u for u in self._users if u.id == user_id), None)

    def get_protocols(
        self,
        user_id: str | None = None,
        status: str | None = None,
    ) -> list[Protocol]:
        with self._lock:
            return [
                p
                for p in self._protocols.values()
                if (user_id is None or p.assignee_id == user_id)
                and (status is None or p.status == status)
            ]

    def get_protocol_by_id(self, protocol_id: str) -> Protocol | None:
        with self._lock:
            return self._protocols.get(protocol_id)

    def count_open_for_user(self, user_id: str) -> int:
        with self._lock:
            return sum(
                1
                for p in self._protocols.values()
                if p.assignee_id == user_id and is_open_status(p.status)
            )

    # -- writes -------------------------------------------------------------

    def update_protocol_status(
        self,
        protocol_id: str,
        new_status: str,
        completed_at: str | None,
    ) -> None:
        with self._lock:
            current = self._protocols.get(protocol_id)
            if current is None:
                raise ProtocolNotFoundError(protocol_id)
            self._protocols[protocol_id] = dataclasses.replace(
                current, status=new_status, completed_at=completed_at
            )

    def close_if_open(self, protocol_id: str, completed_at: str) -> bool:
        with self._lock:
            current = self._protocols.get(protocol_id)
            if current is None:
                raise ProtocolNotFoundError(protocol_id)
            if not is_open_status(current.status):
                return False
            self._protocols[protocol_id] = dataclasses.replace(
                current, status=STATUS_CLOSED, completed_at=completed_at
            )
            return True

    def reset(self) -> int:
        with self._lock:
            self._users = seed_users()
            self._protocols = {p.id: p for p in seed_protocols()}
            count = len(self._protocols)
        logger.info("In-memory store seeded with %d protocols", count)
        return count
