"""
Password History
=================

Bounded, in-memory list of the most recently generated unique
passwords, newest first. History belongs to the caller (the CLI keeps
one per invocation); the generator and the engine never own it.
"""

from __future__ import annotations

from typing import Iterator

DEFAULT_HISTORY_SIZE = 10
DISPLAY_WIDTH = 30


def truncate_for_display(password: str, width: int = DISPLAY_WIDTH) -> str:
    """Shorten *password* to *width* characters followed by ``...``."""
    return password[:width] + "..." if len(password) > width else password


class PasswordHistory:
    """Most-recent-first list of unique passwords.

    Usage::

        history = PasswordHistory(max_size=10)
        history.add("pw1")
        history.add("pw2")
        list(history)        # ["pw2", "pw1"]
    """

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._max_size = max_size
        self._items: list[str] = []

    @property
    def max_size(self) -> int:
        return self._max_size

    def add(self, password: str) -> bool:
        """Record *password* at the front.

        Returns ``False`` (and changes nothing) if it is already present.
        The oldest entries are dropped beyond ``max_size``.
        """
        if password in self._items:
            return False
        self._items.insert(0, password)
        del self._items[self._max_size :]
        return True

    def remove(self, index: int) -> str:
        """Remove and return the entry at *index* (0 is the newest)."""
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> list[str]:
        return list(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, password: object) -> bool:
        return password in self._items
