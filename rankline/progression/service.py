"""RankService: turns XP totals into API responses against one tier table."""

from rankline.shared.utils.logging import get_logger

from .calculator import RankInfo, compute_rank_info, validate_xp
from .config import RankSettings, get_settings, get_tier_table
from .exceptions import InvalidArgumentError
from .formatting import format_xp, xp_bar_label
from .leaderboard import build_leaderboard, tier_distribution
from .schemas import (
    LeaderboardEntryResponse,
    PlayerXP,
    RankInfoResponse,
    RankTierResponse,
    TierDistributionResponse,
)
from .tiers import RankTable, RankTier

logger = get_logger(__name__)


class RankService:
    """Resolves ranks, leaderboards and tier listings."""

    def __init__(self, table: RankTable | None = None, settings: RankSettings | None = None):
        self.settings = settings if settings is not None else get_settings()
        self.table = table if table is not None else get_tier_table()

    @property
    def lenient(self) -> bool:
        return self.settings.lenient_negative_xp

    def tier_response(self, tier: RankTier) -> RankTierResponse:
        return RankTierResponse(
            name=tier.name,
            base_xp=tier.base_xp,
            levels=tier.levels,
            level_xp=tier.level_xp,
            color=tier.color,
            ceiling_xp=tier.ceiling_xp,
            next_rank_xp=self.table.next_rank_xp(tier),
            is_max_rank=self.table.is_terminal(tier),
        )

    def list_tiers(self) -> list[RankTierResponse]:
        return [self.tier_response(tier) for tier in self.table]

    def get_tier(self, name: str) -> RankTierResponse:
        return self.tier_response(self.table.find(name))

    def info_response(self, xp: int, info: RankInfo) -> RankInfoResponse:
        return RankInfoResponse(
            xp=xp,
            xp_display=format_xp(xp),
            rank=self.tier_response(info.rank),
            level=info.level,
            xp_in_level=info.xp_in_level,
            xp_for_next_level=info.xp_for_next_level,
            xp_to_next_level=info.xp_to_next_level,
            next_level_xp=info.next_level_xp,
            progress_percent=info.progress_percent,
            is_max_rank=info.is_max_rank,
            label=xp_bar_label(info, xp),
        )

    def get_rank(self, xp: int) -> RankInfoResponse:
        """Rank info for a single XP total."""
        xp = validate_xp(xp, lenient=self.lenient)
        return self.info_response(xp, compute_rank_info(xp, self.table))

    def get_ranks(self, xp_values: list[int]) -> list[RankInfoResponse]:
        """Rank info for several XP totals, in input order."""
        if len(xp_values) > self.settings.max_batch_size:
            raise InvalidArgumentError(
                f"At most {self.settings.max_batch_size} XP values per batch, got {len(xp_values)}"
            )
        return [self.get_rank(xp) for xp in xp_values]

    def leaderboard(
        self,
        players: list[PlayerXP],
        limit: int | None = None,
    ) -> list[LeaderboardEntryResponse]:
        if limit is None:
            limit = self.settings.leaderboard_limit
        if limit > self.settings.max_leaderboard_limit:
            raise InvalidArgumentError(
                f"Leaderboard limit must not exceed {self.settings.max_leaderboard_limit}, got {limit}"
            )
        entries = build_leaderboard(players, limit, self.table, lenient=self.lenient)
        logger.info("leaderboard_request", players=len(players), limit=limit, returned=len(entries))
        return entries

    def distribution(self, players: list[PlayerXP]) -> TierDistributionResponse:
        return tier_distribution(players, self.table, lenient=self.lenient)
