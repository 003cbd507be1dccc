"""
Logging helpers for safe error handling and message sanitization.

This module provides utilities to prevent information leakage through
error messages while preserving detailed logging for debugging.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def sanitize_exception_message(e: Exception, safe_message: str = "An error occurred") -> str:
    """
    Sanitize exception message for user display.

    Prevents credentials or tenant details from reaching the browser while
    keeping the full exception in the server log.

    Args:
        e: The exception to sanitize
        safe_message: Generic message to return to users

    Returns:
        Safe error message for user display

    Example:
        >>> try:
        ...     raise ValueError("client_secret=abc rejected by tenant")
        ... except Exception as e:
        ...     user_msg = sanitize_exception_message(e, "Failed to save config")
        ...     return {"error": user_msg}
    """
    logger.exception(f"[security] Exception sanitized: {e}")
    return safe_message
