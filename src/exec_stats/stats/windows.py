"""Reporting window lengths and backward history traversal."""

from typing import Iterator, Sequence, TypeVar

__all__ = [
    "DAY_LENGTH",
    "WEEK_LENGTH",
    "MONTH_LENGTH",
    "InvalidWindowError",
    "validate_window_length",
    "recent_entries",
]

T = TypeVar("T")

# Window sizes in days; "today" counts as one of them
DAY_LENGTH = 1
WEEK_LENGTH = 7
MONTH_LENGTH = 30


class InvalidWindowError(ValueError):
    """Raised for a non-positive window length."""


def validate_window_length(window_length: int) -> int:
    if isinstance(window_length, bool) or not isinstance(window_length, int):
        raise InvalidWindowError(
            f"window length must be an integer, got {type(window_length).__name__}"
        )
    if window_length <= 0:
        raise InvalidWindowError(f"window length must be positive, got {window_length}")
    return window_length


def recent_entries(history: Sequence[T], window_length: int) -> Iterator[T]:
    """Yield history entries most-recent-first for a window that includes today.

    Today is not part of ``history``, so at most ``window_length - 1`` entries
    are yielded. A short history simply yields fewer.
    """
    validate_window_length(window_length)
    limit = min(len(history), window_length - 1)
    for offset in range(1, limit + 1):
        yield history[len(history) - offset]
