from typing import Optional

from app.db.models.scoring_rules import ScoringRules
from app.db.repositories.base import BaseRepository


class ScoringRulesRepository(BaseRepository):

    def get_rules_for_season(self, season_id: int) -> Optional[ScoringRules]:
        return self.db.get(ScoringRules, season_id)

    def upsert_rules(self, rules: ScoringRules) -> ScoringRules:
        return self._upsert(rules)

    def delete_rules(self, season_id: int) -> bool:
        rules = self.get_rules_for_season(season_id)
        if not rules:
            return False
        self.db.delete(rules)
        self.commit()
        return True
