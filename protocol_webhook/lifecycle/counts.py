from __future__ import annotations

from protocol_webhook.store.base import ProtocolStore


class CountEngine:
    """Derive the number of still-open protocols assigned to a user."""

    def __init__(self, store: ProtocolStore) -> None:
        self.store = store

    def remaining(self, user_id: str) -> int:
        return self.store.count_open_for_user(user_id)
