"""
Secure Random Source
=====================

Uniform random indices drawn from the operating system CSPRNG.

Each draw reads four bytes, interprets them as an unsigned 32-bit
integer and reduces it modulo the requested bound. For the bounds used
here (at most the ~94 printable candidates) the modulo bias is below
``bound / 2**32`` and therefore negligible.

If the platform cannot supply secure bytes, :class:`RandomUnavailable`
is raised; the :mod:`random` module is never used.

References:
    - NIST SP 800-90A Rev. 1 (2015). Recommendation for Random Number
      Generation Using Deterministic Random Bit Generators.
    - Knuth, D. E. (1997). The Art of Computer Programming, Vol. 2,
      Section 3.4.2 (Algorithm P, random permutation).
"""

from __future__ import annotations

import secrets
from typing import Callable, MutableSequence, Sequence, TypeVar

from keysmith.core.errors import RandomUnavailable

T = TypeVar("T")

ByteProvider = Callable[[int], bytes]

_WORD_BYTES = 4


class SecureRandomSource:
    """Cryptographically secure index source.

    Usage::

        rng = SecureRandomSource()
        idx = rng.next_index(26)            # 0 <= idx < 26
        ch = rng.choice("abcdef")
        rng.shuffle(chars)                  # in-place Fisher-Yates

    Args:
        byte_provider: Callable returning *n* secure random bytes.
            Defaults to :func:`secrets.token_bytes`; tests inject a
            deterministic provider here.
    """

    def __init__(self, byte_provider: ByteProvider | None = None) -> None:
        self._byte_provider: ByteProvider = byte_provider or secrets.token_bytes

    def next_index(self, bound: int) -> int:
        """Return a uniformly distributed integer in ``[0, bound)``.

        Raises:
            ValueError: If *bound* is not positive.
            RandomUnavailable: If no secure bytes can be obtained.
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")

        try:
            raw = self._byte_provider(_WORD_BYTES)
        except (NotImplementedError, OSError) as exc:
            raise RandomUnavailable(
                "No cryptographically secure random source is available"
            ) from exc

        if len(raw) < _WORD_BYTES:
            raise RandomUnavailable(
                f"Random source returned {len(raw)} bytes, expected {_WORD_BYTES}"
            )

        return int.from_bytes(raw[:_WORD_BYTES], "little") % bound

    def choice(self, seq: Sequence[T]) -> T:
        """Return a uniformly chosen element of a non-empty *seq*."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence")
        return seq[self.next_index(len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Shuffle *items* in place (Fisher-Yates) and return it."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_index(i + 1)
            items[i], items[j] = items[j], items[i]
        return items
