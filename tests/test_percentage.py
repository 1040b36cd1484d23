"""Tests for percentage parsing."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from engine.percentage import parse_percentage


class TestParsePercentage:
    def test_spaced_percent(self):
        assert parse_percentage("80 %") == pytest.approx(0.8)

    def test_compact_and_decimal(self):
        assert parse_percentage("80%") == pytest.approx(0.8)
        assert parse_percentage("72.5 %") == pytest.approx(0.725)

    def test_first_number_wins(self):
        assert parse_percentage("approx 64 % (was 70 %)") == pytest.approx(0.64)

    @pytest.mark.parametrize("text", ["Unavailable", "unavailable", "  UNAVAILABLE ", "", "   ", None])
    def test_missing_values_are_zero(self, text):
        assert parse_percentage(text) == 0.0

    def test_no_digits(self):
        assert parse_percentage("n/a") == 0.0

    def test_numeric_input(self):
        assert parse_percentage(55) == pytest.approx(0.55)

    def test_bool_is_not_a_number(self):
        assert parse_percentage(True) == 0.0

    def test_never_raises_on_odd_input(self):
        assert parse_percentage(["80 %"]) == pytest.approx(0.8)
        assert parse_percentage({}) == 0.0
