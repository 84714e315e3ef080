"""Ranked leaderboard service: score writes, top score and top-N queries."""

__version__ = "1.0.0"
