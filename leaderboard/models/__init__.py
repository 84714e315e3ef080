from .data import Leader, ScoreRec, SCORE_MAX, SCORE_MIN, validate_player_name, validate_score
from .response import HealthResponse, LeaderEntry
from .score import ScoreRequest

__all__ = [
    'Leader', 'ScoreRec', 'SCORE_MAX', 'SCORE_MIN', 'validate_player_name', 'validate_score',
    'HealthResponse', 'LeaderEntry', 'ScoreRequest',
]
