"""Small walk-through of the Bloom filter API.

Run with:

    python -m bf_seeded.examples
"""
from __future__ import annotations

from .bloom_filter import BloomFilter


def main() -> None:
    bf: BloomFilter[str] = BloomFilter(20, 3)

    bf.add("testing")
    bf.add("nottesting")
    bf.add("testingagain")

    print(bf.contains("badstring"))  # False (probably)
    print(bf.contains("testing"))  # True

    test_items = ["badstring", "testing", "test"]

    print(bf.contains_all(test_items))  # False (probably)
    print(bf.contains_any(test_items))  # True

    # False Positive Probability: 0.040894188143892
    print(f"False Positive Probability: {bf.false_positive_probability()}")


if __name__ == "__main__":
    main()
