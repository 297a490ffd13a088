"""
Constrained Password Generator
===============================

Builds random passwords that contain at least one character of every
selected character class.

Algorithm:
1. Reject options without any selected class.
2. Filter each selected class (similar glyphs for every class, ambiguous
   punctuation for symbols only). An emptied class is an error.
3. Concatenate the filtered classes into the full charset. Characters
   shared by several classes are not de-duplicated and so carry a
   proportionally higher sampling weight.
4. Draw one guaranteed character per class, then the remainder from the
   full charset, then shuffle the whole sequence so that guaranteed
   characters do not sit at predictable positions.

When ``length`` is smaller than the number of selected classes only the
first ``length`` guaranteed characters (canonical class order) are kept,
so the output length always equals ``length``.
"""

from __future__ import annotations

from typing import Mapping, Optional

from keysmith.core.errors import EmptyFilteredClass, NoCharacterClassSelected
from keysmith.core.models import GenerationOptions
from keysmith.generators.charsets import (
    AMBIGUOUS,
    DEFAULT_CLASSES,
    SIMILAR,
    remove_chars,
)
from keysmith.generators.random_source import SecureRandomSource


class PasswordGenerator:
    """Generates passwords satisfying :class:`GenerationOptions`.

    The generator holds no mutable state between calls and can be
    shared across threads.

    Usage::

        generator = PasswordGenerator()
        password = generator.generate(GenerationOptions(length=20))
        batch = generator.generate_many(GenerationOptions(), count=5)

    Args:
        random_source: Source of secure random indices.
        classes: Mapping of class name to candidate characters, keyed by
            ``uppercase``, ``lowercase``, ``numbers`` and ``symbols``.
    """

    def __init__(
        self,
        random_source: Optional[SecureRandomSource] = None,
        classes: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._random = random_source or SecureRandomSource()
        self._classes: Mapping[str, str] = classes if classes is not None else DEFAULT_CLASSES

    @property
    def random_source(self) -> SecureRandomSource:
        return self._random

    def filtered_classes(self, options: GenerationOptions) -> dict[str, str]:
        """Return the filtered candidate string of every selected class.

        Raises:
            NoCharacterClassSelected: No ``include_*`` option is set.
            EmptyFilteredClass: Filtering removed every character of a class.
        """
        selected = options.selected_classes()
        if not selected:
            raise NoCharacterClassSelected()

        filtered: dict[str, str] = {}
        for name in selected:
            chars = self._classes[name]
            if options.exclude_similar:
                chars = remove_chars(chars, SIMILAR)
            if name == "symbols" and options.exclude_ambiguous:
                chars = remove_chars(chars, AMBIGUOUS)
            if not chars:
                raise EmptyFilteredClass(name)
            filtered[name] = chars
        return filtered

    def generate(self, options: GenerationOptions) -> str:
        """Generate one password.

        Raises:
            NoCharacterClassSelected: No ``include_*`` option is set.
            EmptyFilteredClass: Filtering removed every character of a class.
            RandomUnavailable: The secure random source failed.
        """
        filtered = self.filtered_classes(options)
        charset = "".join(filtered.values())

        guaranteed = [self._random.choice(chars) for chars in filtered.values()]
        guaranteed = guaranteed[: options.length]

        remaining = max(0, options.length - len(filtered))
        chars = guaranteed + [self._random.choice(charset) for _ in range(remaining)]

        self._random.shuffle(chars)
        return "".join(chars)

    def generate_many(self, options: GenerationOptions, count: int = 5) -> list[str]:
        """Generate *count* independent passwords with the same options."""
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        return [self.generate(options) for _ in range(count)]


_default_generator = PasswordGenerator()


def generate(options: GenerationOptions) -> str:
    """Generate one password with the module-level default generator."""
    return _default_generator.generate(options)
