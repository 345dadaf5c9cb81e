"""
Classification of failures at the command's external boundaries.

Each function returns the message to reply with when the failure is one the
requester can act on, and None when it must propagate as a fault.
"""

from http import HTTPStatus
from typing import Optional

from aoc_bot.utils.exceptions import DeliveryError, DeliveryErrorKind, FetchError, FetchErrorKind

TOO_LARGE_MESSAGE = (
    "The requested leaderboard slice would be too large to fit in a Discord message. "
    "Try to reduce the number of rows."
)


def format_status(status: int) -> str:
    """Status code with its reason phrase when known, e.g. ``404 Not Found``."""
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


def fetch_error_message(error: FetchError, year: int) -> Optional[str]:
    if error.kind is FetchErrorKind.UPSTREAM_STATUS and error.status is not None:
        return f"Failed to fetch private leaderboard for {year} ({format_status(error.status)})"
    return None


def delivery_error_message(error: DeliveryError) -> Optional[str]:
    if error.kind is DeliveryErrorKind.TOO_LARGE:
        return TOO_LARGE_MESSAGE
    return None
