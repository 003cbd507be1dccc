"""
Component for generating Server-Sent Events (SSE) formatted output.

Transforms broadcaster events into SSE protocol frames and emits periodic
ping keep-alives while the stream is idle.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator, Callable
from typing import Any

from deskmap.components.events.change_broadcaster_comp import ChangeEvent

logger = logging.getLogger(__name__)


def format_sse_event(event_type: str, data: dict[str, Any] | str) -> str:
    """
    Format a single SSE event.

    Args:
        event_type: SSE event name (e.g. "layout", "connected", "ping")
        data: Event data; dicts are serialized as JSON, strings are sent as-is

    Returns:
        Formatted SSE event string
    """
    body = data if isinstance(data, str) else json.dumps(data)
    return f"event: {event_type}\ndata: {body}\n\n"


async def generate_sse_stream(
    event_queue: asyncio.Queue[ChangeEvent],
    cleanup_callback: Callable[[], None] | None = None,
    keepalive_interval: float = 15.0,
) -> AsyncGenerator[str, None]:
    """
    Generate an SSE stream from a queue of broadcaster events.

    Yields a "connected" event first, then every queued event in order, and a
    "ping" event whenever nothing arrived for keepalive_interval seconds.

    Args:
        event_queue: Queue filled by a broadcaster subscription
        cleanup_callback: Run exactly once when the stream ends or is cancelled
        keepalive_interval: Seconds of silence before a ping is sent

    Yields:
        SSE formatted event strings
    """
    try:
        yield format_sse_event("connected", {})

        while True:
            try:
                event = await asyncio.wait_for(event_queue.get(), timeout=keepalive_interval)
            except asyncio.TimeoutError:
                yield format_sse_event("ping", {})
                continue
            yield format_sse_event(event.kind, event.data)

    finally:
        if cleanup_callback:
            try:
                cleanup_callback()
            except Exception as e:
                logger.error(f"[SSE Stream] Error in cleanup callback: {e}")
