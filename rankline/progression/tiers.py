"""Rank tier table: ordered, immutable, validated on construction.

A tier is a band of cumulative XP split into equally sized levels. The
last tier in a table is the max-rank sentinel: it has a single level and
no upper bound.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Final

from rankline.shared.utils.logging import get_logger

from .exceptions import TierNotFoundError, TierTableError

logger = get_logger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class RankTier:
    """A single rank band."""

    name: str
    base_xp: int
    levels: int
    level_xp: int
    color: str

    @property
    def span(self) -> int:
        """XP needed to walk every level of this tier."""
        return self.levels * self.level_xp

    @property
    def ceiling_xp(self) -> int:
        return self.base_xp + self.span


DEFAULT_TIERS: Final[tuple[RankTier, ...]] = (
    RankTier("Bronze", 0, 5, 100, "#cd7f32"),
    RankTier("Silver", 500, 5, 200, "#c0c0c0"),
    RankTier("Gold", 1500, 5, 300, "#ffd700"),
    RankTier("Platinum", 3000, 5, 400, "#e5e4e2"),
    RankTier("Diamond", 5000, 5, 500, "#b9f2ff"),
    RankTier("Heroic", 7500, 5, 750, "#ff69b4"),
    RankTier("Master", 11250, 5, 1000, "#9400d3"),
    RankTier("Grandmaster", 16250, 5, 2000, "#ff4500"),
    RankTier("Red Master", 26250, 5, 3000, "#dc143c"),
    RankTier("Devils Master", 41250, 1, 1, "#4b0082"),
)


def _check_int(tier: RankTier, attr: str, minimum: int) -> None:
    value = getattr(tier, attr)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TierTableError(f"Tier {tier.name!r}: {attr} must be an integer, got {value!r}")
    if value < minimum:
        raise TierTableError(f"Tier {tier.name!r}: {attr} must be >= {minimum}, got {value}")


def validate_tiers(tiers: Iterable[RankTier], strict: bool = True) -> tuple[RankTier, ...]:
    """Check a tier sequence and return it as a tuple.

    With ``strict`` the tiers must be contiguous: each tier starts exactly
    where the previous one's last level ends. Without it, a mismatch is only
    logged: on a gap users sit on the previous tier's top level until the
    next base, on an overlap they skip the previous tier's last levels.
    """
    tiers = tuple(tiers)
    if not tiers:
        raise TierTableError("Tier table must contain at least one tier")

    seen: set[str] = set()
    for tier in tiers:
        if not isinstance(tier.name, str) or not tier.name.strip():
            raise TierTableError(f"Tier name must be a non-empty string, got {tier.name!r}")
        if tier.name in seen:
            raise TierTableError(f"Duplicate tier name {tier.name!r}")
        seen.add(tier.name)
        _check_int(tier, "base_xp", 0)
        _check_int(tier, "levels", 1)
        _check_int(tier, "level_xp", 1)
        if not isinstance(tier.color, str) or not _HEX_COLOR.match(tier.color):
            raise TierTableError(f"Tier {tier.name!r}: color must look like #rrggbb, got {tier.color!r}")

    if tiers[0].base_xp != 0:
        raise TierTableError(f"First tier must start at 0 XP, {tiers[0].name!r} starts at {tiers[0].base_xp}")
    if tiers[-1].levels != 1:
        raise TierTableError(f"Terminal tier {tiers[-1].name!r} must have exactly one level")

    for prev, tier in zip(tiers, tiers[1:]):
        if tier.base_xp <= prev.base_xp:
            raise TierTableError(
                f"Tiers must be sorted by base_xp: {tier.name!r} ({tier.base_xp}) "
                f"follows {prev.name!r} ({prev.base_xp})"
            )
        if tier.base_xp != prev.ceiling_xp:
            if strict:
                raise TierTableError(
                    f"Tier {tier.name!r} must start at {prev.ceiling_xp} "
                    f"({prev.name!r} base + levels * level_xp), got {tier.base_xp}"
                )
            logger.warning(
                "tier_table_not_contiguous",
                tier=prev.name,
                ceiling_xp=prev.ceiling_xp,
                next_tier=tier.name,
                next_base_xp=tier.base_xp,
            )

    return tiers


@dataclass(frozen=True)
class RankTable:
    """Ordered, validated collection of rank tiers."""

    tiers: tuple[RankTier, ...]
    strict: bool = True
    _by_name: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        tiers = validate_tiers(self.tiers, strict=self.strict)
        object.__setattr__(self, "tiers", tiers)
        object.__setattr__(self, "_by_name", {t.name: i for i, t in enumerate(tiers)})

    def __len__(self) -> int:
        return len(self.tiers)

    def __iter__(self) -> Iterator[RankTier]:
        return iter(self.tiers)

    def __getitem__(self, index: int) -> RankTier:
        return self.tiers[index]

    @property
    def first(self) -> RankTier:
        return self.tiers[0]

    @property
    def terminal(self) -> RankTier:
        """The max-rank sentinel (always the last tier)."""
        return self.tiers[-1]

    def is_terminal(self, tier: RankTier) -> bool:
        return tier == self.terminal

    def index(self, tier: RankTier) -> int:
        try:
            return self._by_name[tier.name]
        except KeyError:
            raise TierNotFoundError(tier.name) from None

    def find(self, name: str) -> RankTier:
        """Look up a tier by exact name."""
        try:
            return self.tiers[self._by_name[name]]
        except KeyError:
            raise TierNotFoundError(name) from None

    def next_tier(self, tier: RankTier) -> RankTier | None:
        i = self.index(tier)
        return self.tiers[i + 1] if i + 1 < len(self.tiers) else None

    def next_rank_xp(self, tier: RankTier) -> int | None:
        """Cumulative XP at which the following tier begins; None at max rank."""
        nxt = self.next_tier(tier)
        return nxt.base_xp if nxt is not None else None


DEFAULT_TABLE: Final[RankTable] = RankTable(DEFAULT_TIERS)
