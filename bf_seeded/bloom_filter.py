"""Bloom filter with seeded-PRNG index derivation.

Each item is reduced to one unsigned 32-bit digest (MurmurHash3 via mmh3 by
default). The digest seeds ``random.Random`` and ``k`` successive draws in
``[0, m)`` select the bits to set or test. The optimal ``k`` is
``ceil((m // n) * ln 2)`` with the integer quotient taken first.

The filter is not thread-safe. Changing ``bit_size``, ``set_size`` or
``hash_count`` after insertions does not rehash anything: earlier items may
stop being found and the false positive estimate no longer describes the
stored bits.
"""
from __future__ import annotations

import logging
from typing import Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

from .hashing import Digest, double_hash_positions, murmur3_32, seeded_positions
from .params import (
    check_bit_size,
    check_hash_count,
    check_set_size,
    false_positive_probability,
    optimal_hash_count,
)


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

STRATEGIES = ("seeded", "double")
DEFAULT_STRATEGY = "seeded"


class BloomFilter(Generic[T]):
    """Fixed-size Bloom filter backed by a bytearray bitset."""

    def __init__(
        self,
        bit_size: int,
        set_size: int,
        hash_count: Optional[int] = None,
        *,
        digest: Digest = murmur3_32,
        strategy: str = DEFAULT_STRATEGY,
    ) -> None:
        """Initialize a Bloom filter.

        Args:
            bit_size: Number of bits in the filter (m).
            set_size: Expected number of items (n).
            hash_count: Bit positions per item (k). Computed with
                :func:`optimal_hash_count` when omitted.
            digest: Maps an item to the unsigned 32-bit integer seeding the
                position generator. Ignored by the ``"double"`` strategy.
            strategy: ``"seeded"`` or ``"double"``.

        Raises:
            ValueError: If bit_size or set_size is not positive, hash_count
                is negative or strategy is unknown.
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"unknown strategy {strategy!r}, expected one of {STRATEGIES}")

        self._bit_size = check_bit_size(bit_size)
        self._set_size = check_set_size(set_size)
        if hash_count is None:
            hash_count = optimal_hash_count(bit_size, set_size)
        self._hash_count = check_hash_count(hash_count)
        self._digest = digest
        self._strategy = strategy
        self._bit_array = bytearray((bit_size + 7) // 8)
        self._allocated_bits = bit_size

        logger.debug(
            "BloomFilter created: m=%d n=%d k=%d strategy=%s",
            self._bit_size, self._set_size, self._hash_count, strategy,
        )
        if self._hash_count == 0:
            logger.warning("hash_count is 0, every membership query will be true")

    def add(self, item: T) -> None:
        """Insert ``item`` into the filter."""
        for bit_index in self._hashes(item):
            self._bit_array[bit_index >> 3] |= 1 << (bit_index & 7)

    def update(self, items: Iterable[T]) -> None:
        """Insert all ``items`` into the filter."""
        for item in items:
            self.add(item)

    def contains(self, item: T) -> bool:
        """Return True if ``item`` may be present, False if definitely absent."""
        for bit_index in self._hashes(item):
            if not (self._bit_array[bit_index >> 3] & (1 << (bit_index & 7))):
                return False
        return True

    def __contains__(self, item: T) -> bool:
        """Check if ``item`` is in the filter."""
        return self.contains(item)

    def contains_any(self, items: Iterable[T]) -> bool:
        """Return True if any of ``items`` may be present."""
        for item in items:
            if self.contains(item):
                return True
        return False

    def contains_all(self, items: Iterable[T]) -> bool:
        """Return True if every one of ``items`` may be present."""
        for item in items:
            if not self.contains(item):
                return False
        return True

    def false_positive_probability(self) -> float:
        """Estimate the false positive probability from the declared set size.

        The estimate does not track how many items were actually added.
        """
        return false_positive_probability(self._bit_size, self._set_size, self._hash_count)

    def positions(self, item: T) -> List[int]:
        """Return the bit positions ``item`` maps to, in derivation order."""
        return list(self._hashes(item))

    def _hashes(self, item: T) -> Iterator[int]:
        if self._strategy == "double":
            return double_hash_positions(item, self._hash_count, self._bit_size)
        return seeded_positions(self._digest(item), self._hash_count, self._bit_size)

    @property
    def hash_count(self) -> int:
        """Number of bit positions per item (k)."""
        return self._hash_count

    @hash_count.setter
    def hash_count(self, value: int) -> None:
        self._hash_count = check_hash_count(value)
        if value == 0:
            logger.warning("hash_count is 0, every membership query will be true")

    @property
    def set_size(self) -> int:
        """Expected number of items (n), used only by the probability estimate."""
        return self._set_size

    @set_size.setter
    def set_size(self, value: int) -> None:
        self._set_size = check_set_size(value)

    @property
    def bit_size(self) -> int:
        """Size of the filter in bits (m)."""
        return self._bit_size

    @bit_size.setter
    def bit_size(self, value: int) -> None:
        self._bit_size = check_bit_size(value)
        allocated = self._allocated_bits
        if value != allocated:
            logger.warning(
                "bit_size set to %d but the bit array holds %d bits; it is not resized",
                value, allocated,
            )

    @property
    def strategy(self) -> str:
        """Index derivation scheme, ``"seeded"`` or ``"double"``."""
        return self._strategy

    @property
    def bit_array(self) -> bytearray:
        """Expose the underlying bit array for inspection."""
        return self._bit_array

    @property
    def bits_set(self) -> int:
        """Count number of bits set in the filter."""
        return sum(bin(byte).count("1") for byte in self._bit_array)

    @property
    def fill_rate(self) -> float:
        """Proportion of bits set."""
        return self.bits_set / self._bit_size

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(bit_size={self._bit_size}, set_size={self._set_size}, "
            f"hash_count={self._hash_count}, strategy={self._strategy!r})"
        )
