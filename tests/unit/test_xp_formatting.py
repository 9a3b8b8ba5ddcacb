"""Unit tests for XP display helpers."""

import math

import pytest

from rankline.progression.calculator import compute_rank_info
from rankline.progression.formatting import format_xp, xp_bar_label


class TestFormatXP:
    @pytest.mark.parametrize(
        "xp,expected",
        [
            (0, "0"),
            (999, "999"),
            (1000, "1K"),
            (1500, "1.5K"),
            (41250, "41.3K"),
            (1_000_000, "1M"),
            (2_500_000_000, "2.5B"),
            (3_000_000_000_000, "3T"),
        ],
    )
    def test_compact(self, xp, expected):
        assert format_xp(xp) == expected

    def test_numeric_string(self):
        assert format_xp("1500") == "1.5K"

    def test_integer_beyond_float_range(self):
        assert format_xp(10**400) == "1" + "0" * 388 + "T"

    def test_large_integer_rounds_half_up_exactly(self):
        # 2**64 / 10**12 = 18446744.073709551616
        assert format_xp(2**64) == "18446744.1T"
        assert format_xp(10**30 + 5 * 10**10) == "1000000000000000000.1T"

    def test_fractional_below_thousand(self):
        assert format_xp(2.5) == "2.5"

    @pytest.mark.parametrize("value", [None, "abc", math.nan, math.inf, True, object()])
    def test_garbage_renders_zero(self, value):
        assert format_xp(value) == "0"


class TestXPBarLabel:
    def test_in_progress(self):
        info = compute_rank_info(2250)
        assert xp_bar_label(info, 2250) == "Gold Lvl. 3 | 2,250 / 2,400 XP"

    def test_start_of_bronze(self):
        info = compute_rank_info(0)
        assert xp_bar_label(info, 0) == "Bronze Lvl. 1 | 0 / 100 XP"

    def test_max_rank(self):
        info = compute_rank_info(99_999)
        assert xp_bar_label(info, 99_999) == "Devils Master Lvl. 1 | MAX RANK"
