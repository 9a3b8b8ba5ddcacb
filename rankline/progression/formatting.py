"""Display helpers for XP totals and the XP bar."""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Final

from .calculator import RankInfo

_COMPACT_UNITS: Final[list[tuple[int, str]]] = [
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
]


def _as_decimal(xp: object) -> Decimal | None:
    """Exact decimal value of ``xp``, or None when it is not a finite number."""
    if isinstance(xp, bool):
        return None
    if isinstance(xp, int):
        return Decimal(xp)
    if isinstance(xp, str):
        try:
            num = Decimal(xp.strip())
        except InvalidOperation:
            return None
        return num if num.is_finite() else None
    try:
        num = float(xp)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(num):
        return None
    return Decimal(num)


def format_xp(xp: object) -> str:
    """Compact XP label: 1500 -> "1.5K", 1000000 -> "1M", 999 -> "999".

    Anything that is not a finite number renders as "0". Integers of any
    size are formatted exactly.
    """
    num = _as_decimal(xp)
    if num is None:
        return "0"

    with localcontext() as ctx:
        # room for every integer digit plus one decimal place
        ctx.prec = max(28, num.adjusted() + 4)
        for threshold, suffix in _COMPACT_UNITS:
            if num >= threshold:
                # exact halves round up: 41250 -> "41.3K"
                text = str((num / threshold).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
                if text.endswith(".0"):
                    text = text[:-2]
                return f"{text}{suffix}"

    if num == num.to_integral_value():
        return str(int(num))
    return str(float(num))


def xp_bar_label(info: RankInfo, xp: int) -> str:
    """Text shown above an XP bar, e.g. "Gold Lvl. 3 | 2,250 / 2,400 XP"."""
    head = f"{info.rank.name} Lvl. {info.level}"
    if info.is_max_rank:
        return f"{head} | MAX RANK"
    return f"{head} | {xp:,} / {info.next_level_xp:,} XP"
