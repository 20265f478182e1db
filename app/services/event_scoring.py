"""
Recalcula los puntos de todas las predicciones de un evento.

Se ejecuta en la misma petición que guarda o corrige el resultado.
Cada predicción se guarda por separado: si algo falla a mitad, las que ya
se escribieron se quedan con sus puntos nuevos (no hay rollback global).
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import EventNotFoundException
from app.db.models.event_result import EventResult
from app.db.repositories.event import EventRepository
from app.db.repositories.prediction import PredictionRepository
from app.db.repositories.scoring_rules import ScoringRulesRepository
from app.services.scoring import calculate_points, resolve_scoring_rules

logger = logging.getLogger(__name__)


class ScoringStatus(str, enum.Enum):
    SCORED = "scored"
    NO_RESULT = "no_result"
    FAILED = "failed"


@dataclass
class ScoringOutcome:
    event_id: int
    status: ScoringStatus
    predictions_scored: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status != ScoringStatus.FAILED

    def __bool__(self) -> bool:
        # "Sin resultado todavía" también es éxito: no había nada que puntuar
        return self.success


class ScoringService:

    def __init__(self, db: Session):
        self.db = db
        self.events = EventRepository(db)
        self.predictions = PredictionRepository(db)
        self.rules = ScoringRulesRepository(db)

    def calculate_points(
        self,
        season_id: int,
        predicted: Sequence[Optional[str]],
        actual: Sequence[Optional[str]],
    ) -> int:
        rules = resolve_scoring_rules(self.rules, season_id)
        return calculate_points(predicted, actual, rules)

    def recalculate_event_predictions(self, event_id: int, season_id: int) -> ScoringOutcome:
        scored = 0
        try:
            result = self.events.get_event_result(event_id)
            if result is None:
                logger.info("Evento %s sin resultado, nada que puntuar", event_id)
                return ScoringOutcome(event_id=event_id, status=ScoringStatus.NO_RESULT)

            rules = resolve_scoring_rules(self.rules, season_id)
            predictions = self.predictions.list_predictions_by_event(event_id)

            for prediction in predictions:
                prediction.points_earned = calculate_points(prediction.podium, result.podium, rules)
                self.predictions.upsert_prediction(prediction)
                scored += 1

        except Exception as e:
            logger.exception(
                "Fallo recalculando el evento %s (%s predicciones ya guardadas)", event_id, scored
            )
            self.predictions.rollback()
            return ScoringOutcome(
                event_id=event_id,
                status=ScoringStatus.FAILED,
                predictions_scored=scored,
                error=str(e),
            )

        logger.info("Evento %s: %s predicciones puntuadas", event_id, scored)
        return ScoringOutcome(event_id=event_id, status=ScoringStatus.SCORED, predictions_scored=scored)

    def record_event_result(self, event_id: int, podium: Sequence[dict]) -> ScoringOutcome:
        """
        Guarda (o corrige) el podio real de un evento y repuntúa sus predicciones.
        `podium` son 3 dicts {"id": ..., "name": ...} en orden P1, P2, P3.
        """
        event = self.events.get_event(event_id)
        if not event:
            raise EventNotFoundException(f"Evento {event_id} no encontrado")

        slots = list(podium) + [{}] * (3 - len(podium))
        first, second, third = slots[:3]

        self.events.upsert_event_result(EventResult(
            event_id=event_id,
            first_place_id=first.get("id") or "",
            first_place_name=first.get("name") or "",
            second_place_id=second.get("id") or "",
            second_place_name=second.get("name") or "",
            third_place_id=third.get("id") or "",
            third_place_name=third.get("name") or "",
            updated_at=datetime.utcnow(),
        ))

        return self.recalculate_event_predictions(event_id, event.season_id)
