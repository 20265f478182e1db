import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidScoringRulesError, SeasonNotFoundException
from app.db.models.scoring_rules import ScoringRules
from app.db.repositories.scoring_rules import ScoringRulesRepository
from app.db.repositories.season import SeasonRepository
from app.services.scoring import ScoringValues, resolve_scoring_rules

logger = logging.getLogger(__name__)


def validate_scoring_values(values: ScoringValues) -> None:
    if min(values.exact_match_points, values.one_off_points, values.two_off_points) < 0:
        raise InvalidScoringRulesError("Los puntos no pueden ser negativos")

    if values.exact_match_points < values.one_off_points or values.exact_match_points < values.two_off_points:
        raise InvalidScoringRulesError(
            "Los puntos por podio exacto deben ser >= que los de one-off y two-off"
        )


class ScoringRulesService:

    def __init__(self, db: Session):
        self.rules = ScoringRulesRepository(db)
        self.seasons = SeasonRepository(db)

    def get_effective_rules(self, season_id: int) -> ScoringValues:
        return resolve_scoring_rules(self.rules, season_id)

    def set_rules(self, season_id: int, values: ScoringValues) -> ScoringRules:
        if not self.seasons.get_season(season_id):
            raise SeasonNotFoundException(f"Temporada {season_id} no encontrada")

        validate_scoring_values(values)

        rules = self.rules.upsert_rules(ScoringRules(
            season_id=season_id,
            exact_match_points=values.exact_match_points,
            one_off_points=values.one_off_points,
            two_off_points=values.two_off_points,
            created_at=datetime.utcnow(),
        ))
        logger.info("Reglas de puntuación de la temporada %s actualizadas", season_id)
        # Los puntos ya guardados no cambian hasta que se recalculen los eventos
        return rules

    def delete_rules(self, season_id: int) -> bool:
        return self.rules.delete_rules(season_id)
