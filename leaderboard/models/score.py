# --- Pydantic Models ---
from pydantic import BaseModel, Field, StrictInt, field_validator
from .data import SCORE_MAX, SCORE_MIN

class ScoreRequest(BaseModel):
    player_name: str = Field(..., min_length=1)
    score: StrictInt = Field(..., ge=SCORE_MIN, le=SCORE_MAX)

    @field_validator('player_name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('player_name cannot be empty or whitespace')
        return v.strip()
