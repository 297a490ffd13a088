"""
Keysmith Error Taxonomy
========================

Exceptions raised by the generator and the random source. Analysis
never raises: an empty password yields an empty report instead.
"""

from __future__ import annotations


class KeysmithError(Exception):
    """Base class for all Keysmith errors."""


class GenerationError(KeysmithError):
    """Password generation could not satisfy the requested options."""


class NoCharacterClassSelected(GenerationError):
    """None of the four ``include_*`` options is enabled."""

    def __init__(self) -> None:
        super().__init__("Please select at least one character type")


class EmptyFilteredClass(GenerationError):
    """A selected character class has no characters left after filtering.

    Attributes:
        class_name: Name of the emptied class (e.g. ``"symbols"``).
    """

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(
            f"Character class '{class_name}' is empty after exclusion filtering"
        )


class RandomUnavailable(KeysmithError):
    """No cryptographically secure random source is available."""
