"""
Unbiased Random Sampling
=========================

Cryptographically secure integer sampling free of modulo bias.

Every draw starts from a 32-bit unsigned value supplied by a
:class:`SecureRandomSource`. Reducing such a value with ``v % n`` favours
low results whenever ``n`` does not divide ``2**32``; :class:`UnbiasedRandom`
instead rejects draws at or above the largest multiple of ``n`` that fits
in 32 bits, so every residue is exactly equally likely.

The source is injected so that tests can supply a deterministic sequence.
If the operating system cannot provide secure randomness the draw fails
with :class:`SecureRandomUnavailableError`; there is no fallback source.

References:
    - Knuth, D. E. (1997). The Art of Computer Programming, Vol. 2,
      Section 3.4.2 (random sampling and shuffling).
    - Lemire, D. (2019). Fast Random Integer Generation in an Interval.
      ACM Transactions on Modeling and Computer Simulation, 29(1).
"""

from __future__ import annotations

import secrets
from typing import MutableSequence, Protocol, Sequence, TypeVar

T = TypeVar("T")

_UINT32_RANGE = 1 << 32


class SecureRandomUnavailableError(RuntimeError):
    """The operating system could not supply secure random bytes."""


class SecureRandomSource(Protocol):
    """Capability that yields uniformly distributed 32-bit unsigned integers."""

    def random_uint32(self) -> int:
        ...


class SystemRandomSource:
    """Default source backed by the operating system CSPRNG."""

    def random_uint32(self) -> int:
        try:
            raw = secrets.token_bytes(4)
        except (NotImplementedError, OSError) as exc:
            raise SecureRandomUnavailableError(
                "No secure random source is available on this system"
            ) from exc
        return int.from_bytes(raw, "little")


class UnbiasedRandom:
    """Rejection-sampling wrapper over a :class:`SecureRandomSource`.

    Usage::

        rng = UnbiasedRandom()
        rng.uniform(7)            # 0..6, each with probability 1/7
        rng.choice("abc")
        rng.shuffle(chars)        # in place
    """

    def __init__(self, source: SecureRandomSource | None = None) -> None:
        self._source = source or SystemRandomSource()

    def uniform(self, max_exclusive: int) -> int:
        """Return an integer in ``[0, max_exclusive)`` with no modulo bias.

        Raises:
            ValueError: If *max_exclusive* is outside ``[1, 2**32]``.
            SecureRandomUnavailableError: If the source cannot produce data.
        """
        if not 1 <= max_exclusive <= _UINT32_RANGE:
            raise ValueError(
                f"max_exclusive must be in [1, 2**32], got {max_exclusive}"
            )
        limit = (_UINT32_RANGE // max_exclusive) * max_exclusive
        while True:
            value = self._source.random_uint32()
            if not 0 <= value < _UINT32_RANGE:
                raise ValueError(f"Random source returned non-uint32 value {value}")
            if value < limit:
                return value % max_exclusive

    def choice(self, pool: Sequence[T]) -> T:
        """Return one element of *pool* drawn uniformly."""
        if not pool:
            raise ValueError("Cannot choose from an empty pool")
        return pool[self.uniform(len(pool))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle *items* in place and return it."""
        for i in range(len(items) - 1, 0, -1):
            j = self.uniform(i + 1)
            items[i], items[j] = items[j], items[i]
        return items
