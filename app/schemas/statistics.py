from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from app.db.models.recalculation_job import JobStatus


class JobStartedOut(BaseModel):
    job_id: str
    message: str


class RecalculationJobOut(BaseModel):
    job_id: str
    season_id: int
    status: JobStatus
    total_users: int
    processed_users: int
    started_at: datetime
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None

    class Config:
        from_attributes = True


class LeaderboardEntryOut(BaseModel):
    rank: int
    user_id: int
    username: str
    points: int
    total_points: int
    best_results_points: Optional[int] = None
    predictions_count: int
    exact_matches: int
    one_off_matches: int
    two_off_matches: int
    last_updated: Optional[datetime] = None
