from typing import List, Optional

from app.db.models.user_statistics import UserStatistics
from app.db.repositories.base import BaseRepository


class UserStatisticsRepository(BaseRepository):

    def get_user_statistics(self, season_id: int, user_id: int) -> Optional[UserStatistics]:
        return self.db.get(UserStatistics, (season_id, user_id))

    def list_by_season(self, season_id: int) -> List[UserStatistics]:
        return (
            self.db.query(UserStatistics)
            .filter(UserStatistics.season_id == season_id)
            .all()
        )

    def upsert_user_statistics(self, stats: UserStatistics) -> UserStatistics:
        # Se pasan todas las columnas: la fila vieja no se suma a la nueva
        return self._upsert(stats)
