from pydantic import BaseModel
from typing import Literal

class LeaderEntry(BaseModel):
    player_name: str
    score: int

class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    uptime: float
    ready: bool
    records: int
