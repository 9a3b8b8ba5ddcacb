"""Rankline.

Rank progression for user XP balances: a static tier table, the
XP-to-rank calculator, leaderboards and the HTTP API in front of them.

Modules:
    - progression: tier table, calculator, formatting, leaderboard, API
    - shared: structured logging and base schemas
"""

__version__ = "1.0.0"
