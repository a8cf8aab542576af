"""Protocol lifecycle service.

A protocol has exactly one transition::

    open → closed

``complete()`` performs it and then notifies the webhook.  The state change
and the remaining-count recount run under a per-protocol lock; the lock is
released before the webhook round-trip, and a failed delivery never reverts
the state change.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone

from protocol_webhook.core.errors import InvalidStateError, ProtocolNotFoundError
from protocol_webhook.lifecycle.counts import CountEngine
from protocol_webhook.lifecycle.payload import WebhookPayload, build_payload
from protocol_webhook.notification.webhook import DispatchResult, WebhookDispatcher
from protocol_webhook.store.base import ProtocolStore, is_open_status
from protocol_webhook.store.records import Protocol, User

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompletionResult:
    protocol: Protocol
    webhook: WebhookPayload
    dispatch: DispatchResult

    @property
    def webhook_sent(self) -> bool:
        return self.dispatch.sent

    def to_dict(self) -> dict:
        return {
            "protocol": self.protocol.to_dict(),
            "webhook": self.webhook.to_dict(),
            "webhookSent": self.dispatch.sent,
            "webhookDetail": self.dispatch.to_dict(),
        }


@dataclass(frozen=True)
class ProtocolDetail:
    protocol: Protocol
    assignee: User | None
    open_protocols_remaining: int

    def to_dict(self) -> dict:
        return {
            **self.protocol.to_dict(),
            "assignee": self.assignee.to_dict() if self.assignee is not None else None,
            "openProtocolsRemaining": self.open_protocols_remaining,
        }


# ---------------------------------------------------------------------------
# Per-protocol locking
# ---------------------------------------------------------------------------

class KeyedLocks:
    """One ``threading.Lock`` per key, alive only while someone holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # key -> [lock, number of holders and waiters]
        self._locks: dict[str, list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


# ---------------------------------------------------------------------------
# LifecycleService
# ---------------------------------------------------------------------------

class LifecycleService:
    """Complete protocols and notify the webhook."""

    def __init__(self, store: ProtocolStore, dispatcher: WebhookDispatcher) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.counts = CountEngine(store)
        self._locks = KeyedLocks()

    def describe(self, protocol_id: str) -> ProtocolDetail:
        """Return *protocol_id* with its assignee and the assignee's open count."""
        protocol = self.store.get_protocol_by_id(protocol_id)
        if protocol is None:
            raise ProtocolNotFoundError(protocol_id)
        return ProtocolDetail(
            protocol=protocol,
            assignee=self.store.get_user(protocol.assignee_id),
            open_protocols_remaining=self.counts.remaining(protocol.assignee_id),
        )

    def complete(self, protocol_id: str) -> CompletionResult:
        """Close an open protocol and send the completion webhook.

        Raises
        ------
        ProtocolNotFoundError
            If *protocol_id* is unknown.
        InvalidStateError
            If the protocol is not open.  Nothing is mutated and no webhook
            is sent.
        """
        with self._locks.hold(protocol_id):
            protocol = self.store.get_protocol_by_id(protocol_id)
            if protocol is None:
                raise ProtocolNotFoundError(protocol_id)
            if not is_open_status(protocol.status):
                raise InvalidStateError(protocol_id, protocol.status)

            assignee_id = protocol.assignee_id
            open_before = self.counts.remaining(assignee_id)

            completed_at = utc_now_iso()
            if not self.store.close_if_open(protocol_id, completed_at):
                # Another writer sharing the database closed it first.
                current = self.store.get_protocol_by_id(protocol_id)
                raise InvalidStateError(
                    protocol_id, current.status if current is not None else protocol.status
                )

            remaining_after = self.counts.remaining(assignee_id)
            if remaining_after != open_before - 1:
                logger.warning(
                    "Open count for user %s moved concurrently: expected %d, recounted %d",
                    assignee_id,
                    open_before - 1,
                    remaining_after,
                )

            updated = self.store.get_protocol_by_id(protocol_id)
            assignee = self.store.get_user(assignee_id)

        if updated is None:
            raise ProtocolNotFoundError(protocol_id)

        logger.info(
            "Protocol %s closed by user %s, %d open remaining",
            protocol_id,
            assignee_id,
            remaining_after,
        )

        payload = build_payload(updated, assignee, remaining_after, completed_at)
        dispatch = self.dispatcher.send(payload.to_dict())

        return CompletionResult(protocol=updated, webhook=payload, dispatch=dispatch)
