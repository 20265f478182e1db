from sqlalchemy.orm import Session

from app.db.repositories.user_statistics import UserStatisticsRepository


class LeaderboardService:

    def __init__(self, db: Session):
        self.stats = UserStatisticsRepository(db)

    def get_season_leaderboard(self, season_id: int) -> list[dict]:
        """
        Clasificación de la temporada a partir de user_statistics.
        Ordena por best_results_points si existe (si no, total_points) y
        luego por nombre. Los empates comparten puesto (1, 2, 2, 4...).
        """
        rows = sorted(
            self.stats.list_by_season(season_id),
            key=lambda s: (-s.ranking_points, s.username.lower()),
        )

        leaderboard = []
        rank = 1
        for i, s in enumerate(rows):
            if i > 0 and s.ranking_points < rows[i - 1].ranking_points:
                rank = i + 1

            leaderboard.append({
                "rank": rank,
                "user_id": s.user_id,
                "username": s.username,
                "points": s.ranking_points,
                "total_points": s.total_points,
                "best_results_points": s.best_results_points,
                "predictions_count": s.predictions_count,
                "exact_matches": s.exact_matches,
                "one_off_matches": s.one_off_matches,
                "two_off_matches": s.two_off_matches,
                "last_updated": s.last_updated,
            })

        return leaderboard
