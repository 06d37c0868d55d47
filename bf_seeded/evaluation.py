"""Empirical evaluation of the Bloom filter.

Splits a sorted list of unique synthetic items 80/20, builds a filter from
the first part (BITS_PER_ITEM bits per item, optimal hash count) and checks
it against both parts: membership, held-out false positives next to the
estimate, near-miss variants, fill and size, and throughput. Every report
runs once per index strategy and the throughput figures are tabulated side
by side.

Run with:

    python -m bf_seeded.evaluation
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .bloom_filter import STRATEGIES, BloomFilter


BITS_PER_ITEM = 10
SYNTHETIC_ITEMS = 100_000
QUERY_OPS = 200_000


def _print_report(title: str, rows: Sequence[Tuple[str, Any]]) -> None:
    print(title)
    for label, value in rows:
        print(f"  {label}: {value}")
    print()


def _rate(hits: int, total: int) -> str:
    return f"{hits}/{total} = {hits / total:.6f}"


def generate_synthetic_data(n: int = SYNTHETIC_ITEMS) -> List[str]:
    """Return ``n`` unique UUID strings, sorted."""
    return sorted(str(uuid.uuid4()) for _ in range(n))


def build_split(
    words: Optional[List[str]] = None, *, strategy: str = "seeded"
) -> Tuple[BloomFilter[str], List[str], List[str]]:
    """Split ``words`` 80/20 and fill a filter with the first part.

    Returns (bloom_filter, inserted, held_out).
    """
    if words is None:
        words = generate_synthetic_data()

    cut = int(len(words) * 0.8)
    inserted, held_out = words[:cut], words[cut:]

    set_size = max(1, len(inserted))
    bloom: BloomFilter[str] = BloomFilter(set_size * BITS_PER_ITEM, set_size, strategy=strategy)
    bloom.update(inserted)
    return bloom, inserted, held_out


def check_membership(bloom: BloomFilter[str], inserted: List[str]) -> int:
    """Return how many inserted items the filter misses (always 0)."""
    missing = [w for w in inserted if w not in bloom]
    rows = [("inserted", len(inserted)), ("missing", len(missing))]
    if missing:
        rows.append(("first missing", missing[:5]))
    _print_report("membership", rows)
    return len(missing)


def measure_false_positives(bloom: BloomFilter[str], inserted: List[str], held_out: List[str]) -> Optional[float]:
    """Fraction of held-out items the filter wrongly accepts."""
    known = set(inserted)
    probes = [w for w in held_out if w not in known]
    if not probes:
        _print_report("held-out false positives", [("skipped", "no held-out items")])
        return None

    hits = sum(w in bloom for w in probes)
    _print_report("held-out false positives", [
        ("observed", _rate(hits, len(probes))),
        ("estimated", f"{bloom.false_positive_probability():.6f}"),
    ])
    return hits / len(probes)


def collision_analysis(bloom: BloomFilter[str], inserted: List[str], held_out: List[str]) -> Optional[float]:
    """Fraction of one-character variants of held-out items the filter accepts."""
    known = set(inserted) | set(held_out)
    variants = []
    for word in held_out[:500]:
        variants.extend(("x" + word, word + "x", word[:-1] + "z"))
    variants = [v for v in variants if v and v not in known]
    if not variants:
        _print_report("near-miss variants", [("skipped", "no variants")])
        return None

    hits = sum(v in bloom for v in variants)
    _print_report("near-miss variants", [("accepted", _rate(hits, len(variants)))])
    return hits / len(variants)


def show_properties(bloom: BloomFilter[str], inserted: List[str]) -> Dict[str, Any]:
    """Report sizing and fill of ``bloom``."""
    props = {
        "bit_size": bloom.bit_size,
        "bytes": len(bloom.bit_array),
        "hash_count": bloom.hash_count,
        "fill_rate": bloom.fill_rate,
        "items": len(inserted),
    }
    rows = [(key, value) for key, value in props.items()]
    if inserted:
        rows.append(("bits per item", f"{bloom.bit_size / len(inserted):.2f}"))
    _print_report(repr(bloom), rows)
    return props


def _timed(fn, items: Sequence[str]) -> Tuple[float, float]:
    start = time.perf_counter()
    for item in items:
        fn(item)
    elapsed = time.perf_counter() - start
    return elapsed, (len(items) / elapsed if elapsed > 0 else float("inf"))


def measure_performance(
    bloom: BloomFilter[str], inserted: List[str], held_out: List[str], target_ops: int = QUERY_OPS
) -> Dict[str, float]:
    """Time inserts into a fresh filter shaped like ``bloom``, then ``target_ops`` lookups."""
    fresh: BloomFilter[str] = BloomFilter(
        bloom.bit_size, bloom.set_size, bloom.hash_count, strategy=bloom.strategy
    )
    queries = held_out or inserted
    lookups = (queries * (target_ops // max(1, len(queries)) + 1))[:target_ops]

    insert_time, insert_rate = _timed(fresh.add, inserted)
    query_time, query_rate = _timed(fresh.contains, lookups)

    metrics = {
        "insert_count": len(inserted),
        "insert_time": insert_time,
        "insert_ops_per_sec": insert_rate,
        "query_count": len(lookups),
        "query_time": query_time,
        "query_ops_per_sec": query_rate,
    }
    _print_report("throughput", [
        ("inserts", f"{len(inserted)} in {insert_time:.4f}s ({insert_rate:,.0f}/s)"),
        ("lookups", f"{len(lookups)} in {query_time:.4f}s ({query_rate:,.0f}/s)"),
    ])
    return metrics


def compare_performance(metrics: Dict[str, Dict[str, float]]) -> None:
    """Tabulate throughput metrics with one column per strategy."""
    names = list(metrics)
    print(f"{'metric':<22}" + "".join(f"{name:>16}" for name in names))
    for key in ("insert_ops_per_sec", "query_ops_per_sec", "insert_time", "query_time"):
        cells = "".join(f"{metrics[name][key]:>16,.4g}" for name in names)
        print(f"{key:<22}{cells}")
    print()


def run_all(n: int = SYNTHETIC_ITEMS, target_ops: int = QUERY_OPS) -> Dict[str, Dict[str, float]]:
    """Evaluate every strategy on one shared split and compare throughput."""
    words = generate_synthetic_data(n)
    print(f"{len(words)} synthetic items, {BITS_PER_ITEM} bits per inserted item\n")

    metrics = {}
    for strategy in STRATEGIES:
        print(f"--- strategy: {strategy} ---\n")
        bloom, inserted, held_out = build_split(words, strategy=strategy)
        check_membership(bloom, inserted)
        measure_false_positives(bloom, inserted, held_out)
        collision_analysis(bloom, inserted, held_out)
        show_properties(bloom, inserted)
        metrics[strategy] = measure_performance(bloom, inserted, held_out, target_ops)

    print("--- throughput by strategy ---\n")
    compare_performance(metrics)
    return metrics


if __name__ == "__main__":
    run_all()
