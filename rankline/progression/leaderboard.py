"""Leaderboard ranking over externally supplied XP balances.

Players are ordered by XP (highest first) with ties broken by username,
then decorated with the rank each XP total maps to.
"""

from __future__ import annotations

from collections.abc import Iterable

from rankline.shared.utils.logging import get_logger

from .calculator import compute_rank_info, validate_xp
from .exceptions import InvalidArgumentError
from .formatting import format_xp
from .schemas import LeaderboardEntryResponse, PlayerXP, TierCount, TierDistributionResponse
from .tiers import DEFAULT_TABLE, RankTable

logger = get_logger(__name__)


def _checked(players: Iterable[PlayerXP], lenient: bool) -> list[tuple[PlayerXP, int]]:
    return [(p, validate_xp(p.xp, lenient=lenient)) for p in players]


def build_leaderboard(
    players: Iterable[PlayerXP],
    limit: int = 100,
    table: RankTable = DEFAULT_TABLE,
    *,
    lenient: bool = False,
) -> list[LeaderboardEntryResponse]:
    """Top ``limit`` players by XP, breaking ties by username."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgumentError(f"Leaderboard limit must be a positive integer, got {limit!r}")

    checked = _checked(players, lenient)
    checked.sort(key=lambda item: (-item[1], item[0].username))

    entries = []
    for position, (player, xp) in enumerate(checked[:limit], start=1):
        info = compute_rank_info(xp, table)
        entries.append(
            LeaderboardEntryResponse(
                position=position,
                user_id=player.user_id,
                username=player.username,
                xp=xp,
                xp_display=format_xp(xp),
                rank_name=info.rank.name,
                level=info.level,
                color=info.rank.color,
                is_max_rank=info.is_max_rank,
            )
        )

    logger.debug("leaderboard_built", players=len(checked), returned=len(entries))
    return entries


def tier_distribution(
    players: Iterable[PlayerXP],
    table: RankTable = DEFAULT_TABLE,
    *,
    lenient: bool = False,
) -> TierDistributionResponse:
    """Count players per tier. Every tier is listed, including empty ones."""
    counts = {tier.name: 0 for tier in table}
    checked = _checked(players, lenient)
    for _, xp in checked:
        counts[compute_rank_info(xp, table).rank.name] += 1

    return TierDistributionResponse(
        total=len(checked),
        tiers=[TierCount(name=t.name, color=t.color, count=counts[t.name]) for t in table],
    )
