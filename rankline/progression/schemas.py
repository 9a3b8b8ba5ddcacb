"""Pydantic v2 schemas for the rank progression API."""

from uuid import UUID

from pydantic import Field

from rankline.shared.schemas.base import BaseSchema


class RankTierResponse(BaseSchema):
    """One tier of the active rank table."""

    name: str
    base_xp: int
    levels: int
    level_xp: int
    color: str
    ceiling_xp: int
    next_rank_xp: int | None  # None for the max rank
    is_max_rank: bool = False


class RankInfoResponse(BaseSchema):
    """Rank, level and progress derived from an XP total."""

    xp: int
    xp_display: str
    rank: RankTierResponse
    level: int
    xp_in_level: int
    xp_for_next_level: int
    xp_to_next_level: int
    next_level_xp: int | None
    progress_percent: float = Field(ge=0, le=100)
    is_max_rank: bool
    label: str


class BatchRankRequest(BaseSchema):
    """Several XP totals to resolve in one call."""

    xp_values: list[int] = Field(min_length=1)


class PlayerXP(BaseSchema):
    """A user's XP balance as read from the profile store."""

    user_id: UUID
    username: str
    xp: int


class LeaderboardRequest(BaseSchema):
    """Players to rank, plus an optional cut-off."""

    players: list[PlayerXP]
    limit: int | None = Field(default=None, ge=1)


class LeaderboardEntryResponse(BaseSchema):
    """Single entry in a leaderboard."""

    position: int
    user_id: UUID
    username: str
    xp: int
    xp_display: str
    rank_name: str
    level: int
    color: str
    is_max_rank: bool


class TierCount(BaseSchema):
    name: str
    color: str
    count: int


class TierDistributionResponse(BaseSchema):
    """How many players sit in each tier, in table order."""

    total: int
    tiers: list[TierCount]
