"""Custom exception hierarchy for the concierge API."""
from typing import Optional


class ConciergeError(Exception):
    """Base exception for all concierge errors."""


class UpstreamError(ConciergeError):
    """An upstream provider could not be reached or returned an unreadable body."""

    def __init__(self, service: str, detail: str):
        self.service = service
        self.detail = detail
        super().__init__(f"{service} request failed: {detail}")


class UpstreamStatusError(UpstreamError):
    """The provider answered, but with a non-success ``status`` field."""

    def __init__(self, service: str, status: str, error_message: Optional[str] = None):
        self.status = status
        self.error_message = error_message
        super().__init__(service, error_message or status)
