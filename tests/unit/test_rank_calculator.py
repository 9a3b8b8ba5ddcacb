"""Unit tests for the rank calculator: pure math, no I/O needed."""

import math

import pytest

from rankline.progression.calculator import (
    RankInfo,
    compute_rank_info,
    rank_for_xp,
    validate_xp,
)
from rankline.progression.exceptions import InvalidArgumentError, InvalidXPError
from rankline.progression.tiers import DEFAULT_TABLE, RankTable, RankTier


class TestConcreteScenarios:
    def test_zero_xp(self):
        info = compute_rank_info(0)
        assert info.rank.name == "Bronze"
        assert info.level == 1
        assert info.xp_in_level == 0
        assert info.xp_for_next_level == 100
        assert info.progress_percent == 0
        assert info.is_max_rank is False

    def test_mid_bronze(self):
        info = compute_rank_info(250)
        assert info.rank.name == "Bronze"
        assert info.level == 3
        assert info.xp_in_level == 50
        assert info.progress_percent == 50

    def test_top_of_bronze(self):
        info = compute_rank_info(499)
        assert info.rank.name == "Bronze"
        assert info.level == 5
        assert info.xp_in_level == 99
        assert info.progress_percent == 99

    def test_silver_threshold(self):
        info = compute_rank_info(500)
        assert info.rank.name == "Silver"
        assert info.level == 1
        assert info.xp_in_level == 0
        assert info.xp_for_next_level == 200
        assert info.progress_percent == 0

    def test_max_rank_threshold(self):
        info = compute_rank_info(41250)
        assert info.rank.name == "Devils Master"
        assert info.is_max_rank is True
        assert info.progress_percent == 100
        assert info.level == 1
        assert info.xp_in_level == 0
        assert info.xp_for_next_level == 1

    def test_far_beyond_max_rank(self):
        info = compute_rank_info(100_000)
        assert info.is_max_rank is True
        assert info.progress_percent == 100
        assert info.level == 1
        assert info.xp_in_level == 100_000 - 41250

    def test_red_master_last_level(self):
        info = compute_rank_info(41249)
        assert info.rank.name == "Red Master"
        assert info.level == 5
        assert info.xp_in_level == 2999


class TestProperties:
    def test_every_tier_base_is_level_one(self):
        for tier in DEFAULT_TABLE:
            info = compute_rank_info(tier.base_xp)
            assert info.rank == tier
            assert info.level == 1
            assert info.xp_in_level == 0

    def test_tier_selection_is_monotonic(self):
        prev_base = -1
        for xp in range(0, 60_000, 37):
            base = compute_rank_info(xp).rank.base_xp
            assert base >= prev_base, f"tier went down at xp={xp}"
            prev_base = base

    def test_progress_always_in_range(self):
        for xp in list(range(0, 2_000)) + list(range(40_000, 45_000, 7)):
            info = compute_rank_info(xp)
            assert 0 <= info.progress_percent <= 100

    def test_level_never_exceeds_tier_levels(self):
        for xp in range(0, 45_000, 13):
            info = compute_rank_info(xp)
            assert 1 <= info.level <= info.rank.levels

    def test_idempotent(self):
        for xp in (0, 1, 499, 12_345, 41_250, 10**9):
            assert compute_rank_info(xp) == compute_rank_info(xp)

    def test_max_rank_clamp_for_huge_values(self):
        for xp in (41_250, 41_251, 10**6, 10**12):
            info = compute_rank_info(xp)
            assert info.is_max_rank
            assert info.progress_percent == 100

    def test_frozen_result(self):
        info = compute_rank_info(10)
        with pytest.raises(AttributeError):
            info.level = 4


class TestDerivedFields:
    def test_next_level_xp(self):
        info = compute_rank_info(2250)
        assert info.rank.name == "Gold"
        assert info.level == 3
        assert info.next_level_xp == 2400
        assert info.xp_to_next_level == 150

    def test_max_rank_has_no_next_level(self):
        info = compute_rank_info(50_000)
        assert info.next_level_xp is None
        assert info.xp_to_next_level == 0


class TestInputValidation:
    def test_negative_rejected(self):
        with pytest.raises(InvalidXPError) as exc_info:
            compute_rank_info(-1)
        assert exc_info.value.xp == -1
        assert exc_info.value.error_type == "invalid_xp"

    def test_invalid_xp_is_value_error(self):
        with pytest.raises(ValueError):
            compute_rank_info(-100)
        with pytest.raises(InvalidArgumentError):
            compute_rank_info(-100)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, value):
        with pytest.raises(InvalidXPError):
            compute_rank_info(value)

    def test_non_finite_rejected_even_when_lenient(self):
        with pytest.raises(InvalidXPError):
            compute_rank_info(math.nan, lenient=True)

    @pytest.mark.parametrize("value", [2.5, "100", None, True, [100]])
    def test_non_integer_rejected(self, value):
        with pytest.raises(InvalidXPError):
            compute_rank_info(value)

    def test_integral_float_accepted(self):
        assert compute_rank_info(250.0) == compute_rank_info(250)
        assert validate_xp(250.0) == 250
        assert isinstance(validate_xp(250.0), int)

    def test_lenient_floors_negative_to_lowest_tier(self):
        info = compute_rank_info(-40, lenient=True)
        assert info.rank.name == "Bronze"
        assert info.level == 1
        assert info.xp_in_level == 0
        assert info.progress_percent == 0


class TestRankForXP:
    def test_boundaries(self):
        assert rank_for_xp(0).name == "Bronze"
        assert rank_for_xp(1499).name == "Silver"
        assert rank_for_xp(1500).name == "Gold"
        assert rank_for_xp(16250).name == "Grandmaster"


class TestCustomTables:
    def test_single_tier_table_is_always_max_rank(self):
        table = RankTable((RankTier("Solo", 0, 1, 1, "#123456"),))
        info = compute_rank_info(0, table)
        assert info.is_max_rank
        assert info.rank.name == "Solo"

    def test_plateau_when_tiers_leave_a_gap(self):
        table = RankTable(
            (
                RankTier("Low", 0, 5, 100, "#111111"),
                RankTier("High", 700, 1, 1, "#222222"),
            ),
            strict=False,
        )
        info = compute_rank_info(650, table)
        assert info.rank.name == "Low"
        assert info.level == 5  # raw level would be 7
        assert info.xp_in_level == 50
        assert compute_rank_info(700, table).is_max_rank


def test_rank_info_is_exported():
    from rankline.progression import RankInfo as Exported

    assert Exported is RankInfo
