"""Unit tests for length, resolution and ratio normalizers."""

from __future__ import annotations

import math

import pytest

from mediamatch.config import UnitsConfig
from mediamatch.matcher.units import (
    configure_units,
    get_root_font_size,
    root_font_size,
    set_root_font_size,
    to_count,
    to_decimal,
    to_dpi,
    to_px,
)


class TestToPx:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1in", 96),
            ("2.54cm", 96),
            ("25.4mm", 96),
            ("72pt", 96),
            ("6pc", 96),
            ("96px", 96),
            ("6em", 96),
            ("6rem", 96),
            ("96", 96),
            (96, 96),
            (0, 0),
        ],
    )
    def test_conversions(self, value: str | int, expected: float) -> None:
        assert to_px(value) == pytest.approx(expected)

    def test_units_are_case_insensitive(self) -> None:
        assert to_px("1IN") == pytest.approx(96)
        assert to_px("3Em") == pytest.approx(48)

    def test_trailing_whitespace(self) -> None:
        assert to_px(" 10px  ") == pytest.approx(10)

    def test_unknown_unit_keeps_number(self) -> None:
        assert to_px("10vw") == pytest.approx(10)

    def test_not_a_number(self) -> None:
        assert math.isnan(to_px("wide"))
        assert math.isnan(to_px("em"))

    def test_em_follows_root_font_size(self) -> None:
        set_root_font_size(10)
        assert to_px("48em") == pytest.approx(480)
        assert to_px("2rem") == pytest.approx(20)


class TestToDpi:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1dppx", 96),
            ("2x", 192),
            ("2.54dpcm", 1),
            ("300dpi", 300),
            ("72", 72),
            (150, 150),
        ],
    )
    def test_conversions(self, value: str | int, expected: float) -> None:
        assert to_dpi(value) == pytest.approx(expected)

    def test_not_a_number(self) -> None:
        assert math.isnan(to_dpi("high"))


class TestToDecimal:
    def test_ratio(self) -> None:
        assert to_decimal("16/9") == pytest.approx(16 / 9)

    def test_ratio_with_whitespace(self) -> None:
        assert to_decimal(" 16 / 9 ") == pytest.approx(16 / 9)

    def test_number_passes_through(self) -> None:
        assert to_decimal(4 / 3) == pytest.approx(4 / 3)
        assert to_decimal("1.5") == pytest.approx(1.5)
        assert to_decimal("2") == 2

    def test_zero_denominator(self) -> None:
        assert math.isnan(to_decimal("1/0"))

    def test_not_a_ratio(self) -> None:
        assert math.isnan(to_decimal("wide"))
        assert math.isnan(to_decimal(None))


class TestToCount:
    def test_numbers(self) -> None:
        assert to_count(8, 0) == 8
        assert to_count("3", 1) == 3

    def test_default_for_missing_or_non_numeric(self) -> None:
        assert to_count(None, 1) == 1
        assert to_count("foo", 0) == 0

    def test_zero_is_a_number(self) -> None:
        assert to_count("0", 1) == 0


class TestRootFontSize:
    def test_default(self) -> None:
        assert get_root_font_size() == 16

    def test_context_manager_restores(self) -> None:
        with root_font_size(20) as size:
            assert size == 20
            assert to_px("1em") == pytest.approx(20)
        assert get_root_font_size() == 16

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with root_font_size(8):
                raise RuntimeError("boom")
        assert get_root_font_size() == 16

    @pytest.mark.parametrize("size", [0, -4, float("nan")])
    def test_rejects_non_positive(self, size: float) -> None:
        with pytest.raises(ValueError):
            set_root_font_size(size)
        assert get_root_font_size() == 16

    def test_configure_units(self) -> None:
        configure_units(UnitsConfig(root_font_size=18))
        assert to_px("2em") == pytest.approx(36)
