"""Item digests and bit-position derivation.

Two index strategies are provided:

* **seeded**: a single 32-bit digest of the item seeds ``random.Random`` and
  ``k`` successive ``randrange(size)`` draws give the bit positions. Items
  whose digests collide share the whole position sequence.
* **double**: Kirsch-Mitzenmacher double hashing over MurmurHash3 (mmh3) and
  xxHash64, ``(h1 + i * h2) % size``.
"""
from __future__ import annotations

import random
import struct
from typing import Callable, Hashable, Iterator

import mmh3
import xxhash


Digest = Callable[[Hashable], int]


def item_bytes(item: Hashable) -> bytes:
    """Return the canonical byte form of ``item``.

    ``str`` is UTF-8 encoded and bytes-like objects are used as is. Anything
    else is the built-in ``hash()`` packed as a signed 64-bit integer, so
    equal numbers (``1``, ``1.0``, ``Decimal(1)``, ``Fraction(1)``) share a
    digest. Numeric hashes are stable across runs; hashes of tuples holding
    strings are only stable within one interpreter run.
    """
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    return struct.pack(">q", hash(item))


def murmur3_32(item: Hashable, seed: int = 0) -> int:
    """Unsigned 32-bit MurmurHash3 of ``item``."""
    return mmh3.hash(item_bytes(item), seed, signed=False)


def xxhash_32(item: Hashable, seed: int = 0) -> int:
    """Unsigned 32-bit xxHash of ``item``."""
    return xxhash.xxh32(item_bytes(item), seed=seed).intdigest()


def seeded_positions(digest: int, num_hashes: int, size: int) -> Iterator[int]:
    """Yield ``num_hashes`` positions in ``[0, size)`` drawn from a PRNG seeded with ``digest``."""
    rng = random.Random(digest)
    for _ in range(num_hashes):
        yield rng.randrange(size)


def double_hash_positions(
    item: Hashable, num_hashes: int, size: int, *, seed1: int = 0, seed2: int = 0
) -> Iterator[int]:
    """Generate hash positions using Kirsch-Mitzenmacher double hashing."""
    data = item_bytes(item)
    h1 = mmh3.hash(data, seed1, signed=False)
    h2 = xxhash.xxh64(data, seed=seed2).intdigest() % size

    # h2 == 0 would collapse the progression onto a single bit
    if h2 == 0:
        h2 = 1

    for i in range(num_hashes):
        yield (h1 + i * h2) % size
