import math

import pytest

from bf_seeded.params import false_positive_probability, optimal_hash_count


@pytest.mark.parametrize(
    "bit_size, set_size, expected",
    [
        (20, 3, 5),
        (10, 3, 3),
        (14, 2, 5),
        (1000, 100, 7),
        (7, 8, 0),
    ],
)
def test_optimal_hash_count_truncates_quotient(bit_size, set_size, expected):
    assert optimal_hash_count(bit_size, set_size) == expected


def test_optimal_hash_count_differs_from_float_division():
    assert optimal_hash_count(15, 8) == 1
    assert math.ceil((15 / 8) * math.log(2)) == 2


def test_optimal_hash_count_rejects_empty_set():
    with pytest.raises(ValueError):
        optimal_hash_count(20, 0)


def test_false_positive_probability_reference_value():
    assert false_positive_probability(20, 3, 5) == pytest.approx(0.040894188143892, rel=1e-12)


def test_false_positive_probability_formula():
    expected = (1 - math.exp(-7 * 100 / 1000)) ** 7
    assert false_positive_probability(1000, 100, 7) == pytest.approx(expected)


def test_false_positive_probability_zero_hashes():
    assert false_positive_probability(20, 3, 0) == 1.0


def test_false_positive_probability_rejects_empty_filter():
    with pytest.raises(ValueError):
        false_positive_probability(0, 3, 5)
