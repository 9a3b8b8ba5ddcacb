"""Exceptions raised by the rank progression module."""


class RankError(Exception):
    """Base exception for rank progression errors."""

    def __init__(self, message: str, error_type: str = "rank_error"):
        self.message = message
        self.error_type = error_type
        super().__init__(message)


class InvalidArgumentError(RankError, ValueError):
    """Raised when a caller passes an argument outside the accepted domain."""

    def __init__(self, message: str, error_type: str = "invalid_argument"):
        super().__init__(message, error_type)


class InvalidXPError(InvalidArgumentError):
    """Raised when an XP total is negative, non-finite or not an integer."""

    def __init__(self, xp: object, reason: str = "XP must be a non-negative integer"):
        super().__init__(f"{reason}, got {xp!r}", "invalid_xp")
        self.xp = xp


class TierTableError(RankError):
    """Raised when a rank tier table breaks its ordering or contiguity rules."""

    def __init__(self, message: str):
        super().__init__(message, "invalid_tier_table")


class TierNotFoundError(RankError, LookupError):
    """Raised when a tier name is not present in the active table."""

    def __init__(self, name: str):
        super().__init__(f"Rank tier {name!r} not found", "tier_not_found")
        self.name = name
