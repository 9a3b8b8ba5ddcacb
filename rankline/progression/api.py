"""REST API endpoints for rank tiers, rank lookups and leaderboards."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from rankline.progression.schemas import (
    BatchRankRequest,
    LeaderboardEntryResponse,
    LeaderboardRequest,
    PlayerXP,
    RankInfoResponse,
    RankTierResponse,
    TierDistributionResponse,
)
from rankline.progression.service import RankService
from rankline.shared.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/ranks", tags=["ranks"])


def get_rank_service() -> RankService:
    """Service bound to the active tier table and settings."""
    return RankService()


# ===========================================
# TIER ENDPOINTS
# ===========================================


@router.get("/tiers", response_model=list[RankTierResponse])
async def list_tiers(service: RankService = Depends(get_rank_service)):
    """
    List every tier of the active rank table, lowest first.

    The last entry is the max rank and has no ``next_rank_xp``.
    """
    return service.list_tiers()


@router.get("/tiers/{name}", response_model=RankTierResponse)
async def get_tier(name: str, service: RankService = Depends(get_rank_service)):
    """Get a single tier by name."""
    return service.get_tier(name)


# ===========================================
# RANK LOOKUP ENDPOINTS
# ===========================================


@router.get("/xp/{xp}", response_model=RankInfoResponse)
async def get_rank(xp: int, service: RankService = Depends(get_rank_service)):
    """
    Resolve an XP total to rank, level and progress.

    Negative XP is rejected with 422 unless lenient mode is configured.
    """
    return service.get_rank(xp)


@router.post("/batch", response_model=list[RankInfoResponse])
async def get_ranks(body: BatchRankRequest, service: RankService = Depends(get_rank_service)):
    """Resolve several XP totals at once, preserving input order."""
    return service.get_ranks(body.xp_values)


# ===========================================
# LEADERBOARD ENDPOINTS
# ===========================================


@router.post("/leaderboard", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(body: LeaderboardRequest, service: RankService = Depends(get_rank_service)):
    """
    Rank the supplied players by XP.

    Ties are broken by username. Balances come from the caller since the
    XP ledger lives outside this service.
    """
    return service.leaderboard(body.players, limit=body.limit)


@router.post("/distribution", response_model=TierDistributionResponse)
async def get_distribution(players: list[PlayerXP], service: RankService = Depends(get_rank_service)):
    """Count how many of the supplied players sit in each tier."""
    return service.distribution(players)


__all__ = ["router", "get_rank_service"]
