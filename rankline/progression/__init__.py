"""Rank progression: tier table, rank calculator, leaderboards."""

from rankline.progression.calculator import RankInfo, compute_rank_info, rank_for_xp, validate_xp
from rankline.progression.exceptions import (
    InvalidArgumentError,
    InvalidXPError,
    RankError,
    TierNotFoundError,
    TierTableError,
)
from rankline.progression.formatting import format_xp, xp_bar_label
from rankline.progression.tiers import DEFAULT_TABLE, DEFAULT_TIERS, RankTable, RankTier, validate_tiers

__all__ = [
    "DEFAULT_TABLE",
    "DEFAULT_TIERS",
    "InvalidArgumentError",
    "InvalidXPError",
    "RankError",
    "RankInfo",
    "RankTable",
    "RankTier",
    "TierNotFoundError",
    "TierTableError",
    "compute_rank_info",
    "format_xp",
    "rank_for_xp",
    "validate_tiers",
    "validate_xp",
    "xp_bar_label",
]
