from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from app.api.scoring import outcome_to_response
from app.core.deps import get_db, get_statistics_service, require_admin
from app.core.exceptions import JobNotFoundException
from app.schemas.scoring import EventResultIn, ScoringOutcomeOut
from app.schemas.statistics import JobStartedOut, RecalculationJobOut
from app.services.event_scoring import ScoringService
from app.services.statistics_recalculation import StatisticsRecalculationService

router = APIRouter(prefix="/admin", tags=["Admin"])


# -----------------------
# Resultados de eventos
# -----------------------
@router.post("/results/{event_id}", response_model=ScoringOutcomeOut)
def upsert_event_result(
    event_id: int,
    data: EventResultIn,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin),
):
    # Guardar resultado y 🔥 recalcular puntuaciones de ese evento en la misma petición
    outcome = ScoringService(db).record_event_result(
        event_id, [slot.model_dump() for slot in data.podium]
    )
    if not outcome:
        raise HTTPException(
            status_code=500,
            detail=f"Resultado guardado, pero falló el cálculo de puntos: {outcome.error}",
        )

    return outcome_to_response(outcome)


# -----------------------
# Estadísticas de temporada
# -----------------------
@router.post("/seasons/{season_id}/statistics/recalculate", response_model=JobStartedOut, status_code=202)
def recalculate_season_statistics(
    season_id: int,
    service: StatisticsRecalculationService = Depends(get_statistics_service),
    current_user = Depends(require_admin),
):
    job_id = service.start_recalculation(season_id)
    return JobStartedOut(job_id=job_id, message="Recálculo iniciado")


@router.get("/statistics/jobs/{job_id}", response_model=RecalculationJobOut)
def get_recalculation_job(
    job_id: str,
    service: StatisticsRecalculationService = Depends(get_statistics_service),
    current_user = Depends(require_admin),
):
    job = service.get_job_status(job_id)
    if not job:
        raise JobNotFoundException(f"Job {job_id} no encontrado")
    return job
