from . import health, leaderboard, score

__all__ = ['health', 'leaderboard', 'score']
