"""Errors raised by the custom ID codec."""

from __future__ import annotations


class CustomIdError(Exception):
    """Base error for this package."""


class LengthLimitError(CustomIdError):
    """Raised when an encoded custom ID is longer than the channel allows.

    The would-be output is kept on ``value`` so callers can see what to
    shorten (prefix, field names or values) before retrying.
    """

    def __init__(self, value: str, limit: int) -> None:
        super().__init__(
            f"custom ID is {len(value)} characters, over the limit of {limit}: {value}"
        )
        self.value = value
        self.limit = limit
