from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class PodiumSlot(BaseModel):
    id: str = ""
    name: str = ""


# Resultado real de un evento: [P1, P2, P3]
class EventResultIn(BaseModel):
    podium: list[PodiumSlot] = Field(..., min_length=1, max_length=3)


class ScoringOutcomeOut(BaseModel):
    event_id: int
    status: str
    predictions_scored: int
    error: Optional[str] = None


class ScoringRulesIn(BaseModel):
    # Los rangos los valida ScoringRulesService (400 con InvalidScoringRulesError)
    exact_match_points: int
    one_off_points: int
    two_off_points: int


class ScoringRulesOut(ScoringRulesIn):
    season_id: int
    is_default: bool = False
    created_at: Optional[datetime] = None
