"""Bloom filter with seeded-PRNG index derivation."""
from .bloom_filter import BloomFilter
from .hashing import murmur3_32, xxhash_32
from .params import false_positive_probability, optimal_hash_count

__all__ = [
    "BloomFilter",
    "false_positive_probability",
    "murmur3_32",
    "optimal_hash_count",
    "xxhash_32",
]
