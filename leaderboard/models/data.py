from ..errors import ValidationError

# Signed 64-bit, the widest integer every journal backend stores natively
SCORE_MIN = -2 ** 63
SCORE_MAX = 2 ** 63 - 1

def validate_player_name(player_name) -> str:
    if not isinstance(player_name, str):
        raise ValidationError('player_name must be a string')
    name = player_name.strip()
    if not name:
        raise ValidationError('player_name cannot be empty or whitespace')
    return name

def validate_score(score) -> int:
    # bool is an int subclass but never a valid score
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError('score must be an integer')
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise ValidationError(f'score must be between {SCORE_MIN} and {SCORE_MAX}')
    return score

class ScoreRec:
    """A stored score entry. Immutable once built."""
    __slots__ = ('sequence_id', 'player_name', 'score')

    def __init__(self, data: dict):
        object.__setattr__(self, 'sequence_id', int(data['sequence_id']))
        object.__setattr__(self, 'player_name', validate_player_name(data['player_name']))
        object.__setattr__(self, 'score', validate_score(data['score']))

    def __setattr__(self, name, value):
        raise AttributeError(f"ScoreRec is immutable, cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"ScoreRec is immutable, cannot delete '{name}'")

    def __eq__(self, other):
        if not isinstance(other, ScoreRec):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.sequence_id, self.player_name, self.score))

    def __repr__(self):
        return f"ScoreRec(sequence_id={self.sequence_id}, player_name={self.player_name!r}, score={self.score})"

    @property
    def rank_key(self):
        """Sort key: higher scores first, earlier inserts first among equal scores"""
        return (-self.score, self.sequence_id)

    def to_dict(self):
        return {
            'sequence_id': self.sequence_id,
            'player_name': self.player_name,
            'score': self.score
        }

    def to_leader(self) -> 'Leader':
        return Leader(self.player_name, self.score)

class Leader:
    __slots__ = ('player_name', 'score')
    def __init__(self, player_name: str, score: int):
        self.player_name = player_name
        self.score = score

    def __eq__(self, other):
        if not isinstance(other, Leader):
            return NotImplemented
        return (self.player_name, self.score) == (other.player_name, other.score)

    def __repr__(self):
        return f"Leader(player_name={self.player_name!r}, score={self.score})"

    def to_dict(self):
        return {'player_name': self.player_name, 'score': self.score}
