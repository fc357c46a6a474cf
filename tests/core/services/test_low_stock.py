"""Tests for low-stock detection."""

import pytest

from stockledger.core.services.low_stock import (
    StockLevel,
    crossed_below_threshold,
    stock_level,
)


class TestStockLevel:
    def test_no_threshold(self):
        assert stock_level(0, None) is None

    def test_equal_is_not_low(self):
        assert stock_level(5, 5) is StockLevel.ABOVE_OR_EQUAL

    def test_below(self):
        assert stock_level(4, 5) is StockLevel.BELOW


class TestCrossedBelowThreshold:
    @pytest.mark.parametrize(
        "old, new, threshold, expected",
        [
            (10, 3, 5, True),  # crossing
            (5, 4, 5, True),  # from exactly the threshold
            (3, 2, 5, False),  # already below
            (2, 6, 5, False),  # recovery
            (6, 5, 5, False),  # lands on the threshold
            (None, 2, 5, True),  # created below
            (None, 5, 5, False),  # created at the threshold
            (10, 0, None, False),  # no threshold
            (1, 0, 0, False),  # zero threshold can never be crossed
        ],
    )
    def test_transitions(self, old, new, threshold, expected):
        assert crossed_below_threshold(old, new, threshold) is expected
