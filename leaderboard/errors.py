class LeaderboardError(Exception):
    """Base class for leaderboard failures"""
    status_code = 500

class ValidationError(LeaderboardError, ValueError):
    """Malformed or missing input; never retried"""
    status_code = 400

class NotFoundError(LeaderboardError):
    """The query has no data to return"""
    status_code = 404

class StorageUnavailable(LeaderboardError):
    """Backing store unreachable or not initialized; callers may retry with backoff"""
    status_code = 503
