"""Configuration for rank progression."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from rankline.shared.utils.logging import get_logger

from .exceptions import TierTableError
from .tiers import DEFAULT_TIERS, RankTable, RankTier

logger = get_logger(__name__)

TIER_FIELDS = ("name", "base_xp", "levels", "level_xp", "color")


class RankSettings(BaseSettings):
    """Settings for rank progression."""

    model_config = {"env_prefix": "RANKS_", "case_sensitive": False}

    # Tier Table
    tier_table_path: str | None = Field(
        default=None,
        description="JSON file holding the ordered tier list; built-in table when unset",
    )
    strict_tier_table: bool = Field(
        default=True,
        description="Reject tier tables whose tiers are not contiguous",
    )

    # Input Handling
    lenient_negative_xp: bool = Field(
        default=False,
        description="Floor negative XP to zero instead of rejecting it",
    )

    # Leaderboard
    leaderboard_limit: int = Field(
        default=100,
        ge=1,
        description="Default number of leaderboard entries",
    )
    max_leaderboard_limit: int = Field(
        default=1000,
        ge=1,
        description="Upper bound accepted for a leaderboard limit",
    )
    max_batch_size: int = Field(
        default=500,
        ge=1,
        description="Maximum XP values accepted by one batch request",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON; console renderer otherwise",
    )

    @model_validator(mode="after")
    def check_leaderboard_limits(self) -> "RankSettings":
        if self.leaderboard_limit > self.max_leaderboard_limit:
            raise ValueError(
                f"leaderboard_limit ({self.leaderboard_limit}) must not exceed "
                f"max_leaderboard_limit ({self.max_leaderboard_limit})"
            )
        return self


@lru_cache
def get_settings() -> RankSettings:
    """Get cached rank settings."""
    return RankSettings()


def _tier_from_dict(raw: Any, position: int) -> RankTier:
    if not isinstance(raw, dict):
        raise TierTableError(f"Tier #{position} must be an object, got {type(raw).__name__}")
    missing = [key for key in TIER_FIELDS if key not in raw]
    if missing:
        raise TierTableError(f"Tier #{position} is missing fields: {', '.join(missing)}")
    return RankTier(**{key: raw[key] for key in TIER_FIELDS})


def parse_tier_table(data: Any, strict: bool = True) -> RankTable:
    """Build a RankTable from decoded JSON.

    Accepts either a bare list of tiers or ``{"tiers": [...]}``.
    """
    if isinstance(data, dict):
        data = data.get("tiers")
    if not isinstance(data, list):
        raise TierTableError("Tier table must be a list of tier objects")
    tiers = [_tier_from_dict(raw, i) for i, raw in enumerate(data)]
    return RankTable(tuple(tiers), strict=strict)


def load_tier_table(path: str | Path | None = None, strict: bool | None = None) -> RankTable:
    """Load the tier table from ``path`` (or settings), falling back to the default."""
    settings = get_settings()
    if path is None:
        path = settings.tier_table_path
    if strict is None:
        strict = settings.strict_tier_table

    if path is None:
        return RankTable(DEFAULT_TIERS, strict=strict)

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise TierTableError(f"Tier table file not found: {path}") from None
    except OSError as e:
        raise TierTableError(f"Tier table file {path} could not be read: {e}") from e
    except UnicodeDecodeError as e:
        raise TierTableError(f"Tier table file {path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise TierTableError(f"Tier table file {path} is not valid JSON: {e}") from e

    table = parse_tier_table(data, strict=strict)
    logger.info("tier_table_loaded", path=str(path), tiers=len(table), strict=strict)
    return table


@lru_cache
def get_tier_table() -> RankTable:
    """Get the cached active tier table."""
    return load_tier_table()
