from typing import Optional

from app.db.models.season import Season
from app.db.repositories.base import BaseRepository


class SeasonRepository(BaseRepository):

    def get_season(self, season_id: int) -> Optional[Season]:
        return self.db.get(Season, season_id)
