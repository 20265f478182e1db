from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.schemas.statistics import LeaderboardEntryOut
from app.services.leaderboard import LeaderboardService

router = APIRouter(prefix="/standings", tags=["Standings"])


@router.get("/season/{season_id}", response_model=list[LeaderboardEntryOut])
def individual_season_standings(season_id: int, db: Session = Depends(get_db)):
    # Sale de user_statistics: refleja el último recálculo lanzado
    return LeaderboardService(db).get_season_leaderboard(season_id)
