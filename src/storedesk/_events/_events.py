from enum import Enum


class SessionEvents(str, Enum):
    """Process-wide session events."""

    UNAUTHORIZED = "auth:unauthorized"
