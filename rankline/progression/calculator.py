"""Rank progression calculator. Stateless, deterministic, cacheable.

Maps a lifetime XP total onto a rank tier and a level inside that tier.
The XP counter itself is owned by the reward ledger; this module only reads it.
"""

import math
from dataclasses import dataclass

from rankline.shared.utils.logging import get_logger

from .exceptions import InvalidXPError
from .tiers import DEFAULT_TABLE, RankTable, RankTier

logger = get_logger(__name__)


@dataclass(frozen=True)
class RankInfo:
    """Immutable result of a rank computation."""

    rank: RankTier
    level: int
    xp_in_level: int
    xp_for_next_level: int
    progress_percent: float
    is_max_rank: bool

    @property
    def next_level_xp(self) -> int | None:
        """Cumulative XP at which the current level completes."""
        if self.is_max_rank:
            return None
        return self.rank.base_xp + self.level * self.rank.level_xp

    @property
    def xp_to_next_level(self) -> int:
        if self.is_max_rank:
            return 0
        return self.xp_for_next_level - self.xp_in_level


def validate_xp(xp: object, lenient: bool = False) -> int:
    """Return ``xp`` as an int or raise InvalidXPError.

    Integral floats (``250.0``) are accepted. With ``lenient`` a negative
    total is floored to 0 instead of rejected; non-finite and fractional
    values are rejected either way.
    """
    if isinstance(xp, bool):
        raise InvalidXPError(xp)
    if isinstance(xp, float):
        if not math.isfinite(xp):
            raise InvalidXPError(xp, "XP must be finite")
        if not xp.is_integer():
            raise InvalidXPError(xp)
        xp = int(xp)
    elif not isinstance(xp, int):
        raise InvalidXPError(xp)

    if xp < 0:
        if not lenient:
            raise InvalidXPError(xp)
        logger.warning("negative_xp_floored", xp=xp)
        return 0
    return xp


def rank_for_xp(xp: int, table: RankTable = DEFAULT_TABLE) -> RankTier:
    """Highest tier whose base XP is at or below ``xp``."""
    for tier in reversed(table.tiers):
        if xp >= tier.base_xp:
            return tier
    return table.first


def compute_rank_info(
    xp: int,
    table: RankTable = DEFAULT_TABLE,
    *,
    lenient: bool = False,
) -> RankInfo:
    """Derive rank, level and progress from a lifetime XP total.

    Deterministic and safe to call concurrently. The only side effect is
    the warning logged by ``validate_xp`` when ``lenient`` floors a negative
    total.
    """
    xp = validate_xp(xp, lenient=lenient)
    tier = rank_for_xp(xp, table)

    if table.is_terminal(tier):
        # Uncapped prestige band: the bar is always full.
        return RankInfo(
            rank=tier,
            level=1,
            xp_in_level=xp - tier.base_xp,
            xp_for_next_level=1,
            progress_percent=100.0,
            is_max_rank=True,
        )

    xp_into_tier = xp - tier.base_xp
    level = xp_into_tier // tier.level_xp + 1
    xp_in_level = xp_into_tier % tier.level_xp
    progress = xp_in_level / tier.level_xp * 100

    return RankInfo(
        rank=tier,
        level=min(level, tier.levels),
        xp_in_level=xp_in_level,
        xp_for_next_level=tier.level_xp,
        progress_percent=min(progress, 100.0),
        is_max_rank=False,
    )
