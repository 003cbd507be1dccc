"""
In-process change broadcaster for live viewer updates.

Fan-out registry with one handler per open viewer connection. Events are
fire-and-forget: nothing is buffered or replayed, and a handler attached after
a publish started does not see that event.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """A named event with its payload serialized once for every subscriber."""

    kind: str
    payload: dict[str, Any]
    data: str


ChangeHandler = Callable[[ChangeEvent], None]


class ChangeBroadcaster:
    """
    Thread-safe publish/subscribe registry.

    Guarantees:
    - publish() calls every handler registered when it started, synchronously,
      in registration order, with the same ChangeEvent instance
    - publishes are serialized, so each subscriber sees events in publication order
    - a handler that raises is logged and skipped; the publisher never sees it
    - the returned unsubscribe callable is idempotent
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._publish_lock = threading.RLock()
        self._handlers: dict[int, ChangeHandler] = {}
        self._next_id = 0

    def subscribe(self, handler: ChangeHandler) -> Callable[[], None]:
        """
        Register a handler.

        Args:
            handler: Called with each ChangeEvent published from now on

        Returns:
            Callable that removes the handler (safe to call more than once)
        """
        with self._lock:
            handler_id = self._next_id
            self._next_id += 1
            self._handlers[handler_id] = handler
            count = len(self._handlers)
        logger.debug(f"[Broadcaster] Subscriber {handler_id} attached ({count} active)")

        def unsubscribe() -> None:
            with self._lock:
                removed = self._handlers.pop(handler_id, None)
                remaining = len(self._handlers)
            if removed is not None:
                logger.debug(f"[Broadcaster] Subscriber {handler_id} detached ({remaining} active)")

        return unsubscribe

    def publish(self, kind: str, payload: dict[str, Any]) -> int:
        """
        Deliver an event to every currently registered handler.

        Args:
            kind: Event name (e.g. "layout")
            payload: JSON-serializable payload

        Returns:
            Number of handlers that accepted the event without raising
        """
        event = ChangeEvent(kind=kind, payload=dict(payload), data=json.dumps(payload))

        with self._publish_lock:
            with self._lock:
                handlers = list(self._handlers.items())

            if not handlers:
                logger.debug(f"[Broadcaster] No subscribers, dropping '{kind}' event")
                return 0

            delivered = 0
            for handler_id, handler in handlers:
                try:
                    handler(event)
                    delivered += 1
                except Exception:
                    logger.exception(f"[Broadcaster] Subscriber {handler_id} failed on '{kind}' event")

        logger.debug(f"[Broadcaster] Published '{kind}' to {delivered}/{len(handlers)} subscribers")
        return delivered

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)
