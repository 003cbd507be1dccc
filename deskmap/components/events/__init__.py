"""
Events package.
"""

from .change_broadcaster_comp import ChangeBroadcaster, ChangeEvent, ChangeHandler
from .sse_stream_comp import format_sse_event, generate_sse_stream

__all__ = [
    "ChangeBroadcaster",
    "ChangeEvent",
    "ChangeHandler",
    "format_sse_event",
    "generate_sse_stream",
]
