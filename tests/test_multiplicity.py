"""
Tests for multiplicity factors of symmetric index tuples.
"""

import pytest

from ssstensor import multinomial, multiplicity_factor


class TestMultinomial:
    """Multinomial coefficients."""

    def test_known_values(self):
        assert multinomial([2, 1]) == 3
        assert multinomial([1, 1, 1]) == 6
        assert multinomial([2, 2]) == 6
        assert multinomial([3]) == 1

    def test_empty_counts(self):
        """0! / (empty product) = 1."""
        assert multinomial([]) == 1

    def test_zero_counts_ignored(self):
        assert multinomial([2, 0, 1]) == 3

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            multinomial([2, -1])


class TestMultiplicityFactor:
    """Distinct orderings of an index tuple."""

    def test_repeated_value(self):
        """[1,1,2] -> 3!/(2! 1!) = 3."""
        assert multiplicity_factor([1, 1, 2]) == 3

    def test_all_distinct(self):
        """[1,2,3] -> 3! = 6."""
        assert multiplicity_factor([1, 2, 3]) == 6

    def test_all_equal(self):
        assert multiplicity_factor([1, 1, 1]) == 1

    def test_order_does_not_matter(self):
        assert multiplicity_factor([2, 1, 1]) == multiplicity_factor((1, 1, 2))

    def test_two_pairs(self):
        assert multiplicity_factor((1, 1, 2, 2)) == 6

    def test_empty_sub_edge(self):
        """Sub-edge of an order-1 tensor."""
        assert multiplicity_factor(()) == 1
