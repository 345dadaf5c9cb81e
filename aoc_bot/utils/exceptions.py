"""
Custom exceptions for the Advent of Code commands.

User-facing errors carry a short ``user_message`` that is replied to the
requester. Everything else propagates to the cog's error handler.
"""

from enum import Enum
from typing import Optional


class AocCommandError(Exception):
    """Base exception for errors that are reported back to the requester."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class MissingArgumentError(AocCommandError):
    """Raised when a required argument is absent and has no default."""
    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"Missing required argument '{field}'",
            f"Argument '{field}' is required"
        )


class InvalidArgumentError(AocCommandError):
    """Raised when an argument cannot be parsed or is out of range."""
    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"Invalid value for argument '{field}'",
            f"Failed to parse argument '{field}'"
        )


class FetchErrorKind(Enum):
    UPSTREAM_STATUS = "upstream_status"
    UNEXPECTED = "unexpected"


class FetchError(Exception):
    """Raised by the leaderboard client when a snapshot cannot be fetched.

    ``UPSTREAM_STATUS`` errors carry the HTTP status the server answered with.
    """
    def __init__(self, kind: FetchErrorKind, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status = status

    @classmethod
    def upstream_status(cls, status: int, url: str) -> "FetchError":
        return cls(FetchErrorKind.UPSTREAM_STATUS, f"GET {url} returned HTTP {status}", status=status)

    @classmethod
    def unexpected(cls, message: str) -> "FetchError":
        return cls(FetchErrorKind.UNEXPECTED, message)


class DeliveryErrorKind(Enum):
    TOO_LARGE = "too_large"
    UNEXPECTED = "unexpected"


class DeliveryError(Exception):
    """Raised by a transport when a rendered document cannot be delivered."""
    def __init__(self, kind: DeliveryErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class CompletionDataMissingError(RuntimeError):
    """Raised when a member lacks the completion data a render step relies on."""
    def __init__(self, member_id: int, day: int):
        super().__init__(f"Member {member_id} has no part one completion for day {day}")
        self.member_id = member_id
        self.day = day
