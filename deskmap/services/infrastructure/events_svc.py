"""
Events Service - Manages SSE event streaming for live floor-map viewers.

Bridges the synchronous change broadcaster and the async SSE response: each
stream gets its own asyncio queue fed from the broadcaster thread.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

from deskmap.components.events.sse_stream_comp import generate_sse_stream

if TYPE_CHECKING:
    from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster, ChangeEvent

logger = logging.getLogger(__name__)


class EventsService:
    """
    Service for managing SSE event streams and subscriptions.

    Handles subscription lifecycle and event stream generation.
    """

    def __init__(self, broadcaster: ChangeBroadcaster, keepalive_interval: float = 15.0):
        """
        Initialize EventsService.

        Args:
            broadcaster: Change broadcaster to subscribe viewers to
            keepalive_interval: Seconds of silence before a ping is sent
        """
        self.broadcaster = broadcaster
        self.keepalive_interval = keepalive_interval

    def active_streams(self) -> int:
        return self.broadcaster.subscriber_count()

    async def stream_events(self) -> AsyncGenerator[str, None]:
        """
        Generate an SSE event stream for one viewer.

        Subscribes on first iteration and unsubscribes when the stream ends
        or the client disconnects.

        Yields:
            SSE formatted event strings
        """
        loop = asyncio.get_running_loop()
        event_queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()

        def enqueue(event: ChangeEvent) -> None:
            # Broadcaster handlers may run on any thread
            loop.call_soon_threadsafe(event_queue.put_nowait, event)

        unsubscribe = self.broadcaster.subscribe(enqueue)
        logger.info(f"[Events Service] Viewer connected ({self.active_streams()} active)")

        def cleanup() -> None:
            unsubscribe()
            logger.info(f"[Events Service] Viewer disconnected ({self.active_streams()} active)")

        stream = generate_sse_stream(
            event_queue,
            cleanup_callback=cleanup,
            keepalive_interval=self.keepalive_interval,
        )
        try:
            async for sse_event in stream:
                yield sse_event
        finally:
            # Runs the stream's cleanup now instead of at garbage collection
            await stream.aclose()
