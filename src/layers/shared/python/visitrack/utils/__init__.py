"""Utility functions and helpers."""

from visitrack.utils.client import get_client_ip, get_user_agent
from visitrack.utils.exceptions import (
    InvalidRangeError,
    ValidationError,
    VisitrackError,
)
from visitrack.utils.responses import error, no_content, success, validation_error

__all__ = [
    # Response helpers
    "success",
    "no_content",
    "error",
    "validation_error",
    # Client identification
    "get_client_ip",
    "get_user_agent",
    # Exceptions
    "VisitrackError",
    "ValidationError",
    "InvalidRangeError",
]
