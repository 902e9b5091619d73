"""Tests for base-unit conversions."""

from __future__ import annotations

from decimal import Decimal

import pytest

from escrow_client.codec.amounts import from_base_units, to_base_units


class TestToBaseUnits:
    def test_six_decimals(self) -> None:
        assert to_base_units(Decimal("103"), 6) == 103_000_000

    def test_eighteen_decimals_keeps_precision(self) -> None:
        assert to_base_units("1234567.000000000000000001", 18) == 1234567 * 10**18 + 1

    def test_extra_precision_truncates(self) -> None:
        assert to_base_units(Decimal("1.2345679"), 6) == 1_234_567

    def test_accepts_int(self) -> None:
        assert to_base_units(5, 0) == 5

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            to_base_units(Decimal("-1"), 6)

    def test_nan_raises(self) -> None:
        with pytest.raises(ValueError):
            to_base_units(Decimal("NaN"), 6)


class TestFromBaseUnits:
    def test_six_decimals(self) -> None:
        assert from_base_units(103_000_000, 6) == Decimal("103")

    def test_fraction(self) -> None:
        assert from_base_units(1, 6) == Decimal("0.000001")

    def test_uint256_max_is_exact(self) -> None:
        value = 2**256 - 1
        assert to_base_units(from_base_units(value, 18), 18) == value
