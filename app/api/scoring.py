from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_admin
from app.core.exceptions import EventNotFoundException
from app.db.repositories.event import EventRepository
from app.schemas.scoring import ScoringOutcomeOut, ScoringRulesIn, ScoringRulesOut
from app.services.event_scoring import ScoringService
from app.services.scoring import DEFAULT_SCORING, ScoringValues
from app.services.scoring_rules import ScoringRulesService

router = APIRouter(prefix="/scoring", tags=["Scoring"])


def outcome_to_response(outcome) -> ScoringOutcomeOut:
    return ScoringOutcomeOut(
        event_id=outcome.event_id,
        status=outcome.status.value,
        predictions_scored=outcome.predictions_scored,
        error=outcome.error,
    )


@router.post("/events/{event_id}", response_model=ScoringOutcomeOut)
def score_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin),
):
    event = EventRepository(db).get_event(event_id)
    if not event:
        raise EventNotFoundException(f"Evento {event_id} no encontrado")

    outcome = ScoringService(db).recalculate_event_predictions(event_id, event.season_id)
    if not outcome:
        raise HTTPException(status_code=500, detail=f"Error recalculando puntos: {outcome.error}")

    return outcome_to_response(outcome)


# -----------------------
# Reglas de puntuación
# -----------------------
@router.get("/seasons/{season_id}/rules", response_model=ScoringRulesOut)
def get_scoring_rules(
    season_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin),
):
    service = ScoringRulesService(db)
    stored = service.rules.get_rules_for_season(season_id)
    values = service.get_effective_rules(season_id)

    return ScoringRulesOut(
        season_id=season_id,
        exact_match_points=values.exact_match_points,
        one_off_points=values.one_off_points,
        two_off_points=values.two_off_points,
        is_default=stored is None,
        created_at=stored.created_at if stored else None,
    )


@router.put("/seasons/{season_id}/rules", response_model=ScoringRulesOut)
def put_scoring_rules(
    season_id: int,
    data: ScoringRulesIn,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin),
):
    rules = ScoringRulesService(db).set_rules(season_id, ScoringValues(**data.model_dump()))

    return ScoringRulesOut(
        season_id=season_id,
        exact_match_points=rules.exact_match_points,
        one_off_points=rules.one_off_points,
        two_off_points=rules.two_off_points,
        created_at=rules.created_at,
    )


@router.delete("/seasons/{season_id}/rules")
def delete_scoring_rules(
    season_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin),
):
    if not ScoringRulesService(db).delete_rules(season_id):
        raise HTTPException(404, "La temporada no tiene reglas propias")

    return {
        "message": "Reglas eliminadas, se aplican las de por defecto",
        "defaults": asdict(DEFAULT_SCORING),
    }
