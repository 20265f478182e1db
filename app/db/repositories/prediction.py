from typing import Iterable, List

from app.db.models.prediction import Prediction
from app.db.repositories.base import BaseRepository


class PredictionRepository(BaseRepository):

    def list_predictions_by_event(self, event_id: int) -> List[Prediction]:
        return (
            self.db.query(Prediction)
            .filter(Prediction.event_id == event_id)
            .order_by(Prediction.user_id)
            .all()
        )

    def list_scored_predictions_for_season(self, season_id: int, event_ids: Iterable[int]) -> List[Prediction]:
        """
        Predicciones de los eventos indicados que ya tienen puntos.
        Las que siguen con points_earned a None (evento sin resultado) no cuentan.
        """
        event_ids = list(event_ids)
        if not event_ids:
            return []

        return (
            self.db.query(Prediction)
            .filter(
                Prediction.event_id.in_(event_ids),
                Prediction.points_earned.isnot(None),
            )
            .order_by(Prediction.event_id, Prediction.user_id)
            .all()
        )

    def upsert_prediction(self, prediction: Prediction) -> Prediction:
        return self._upsert(prediction)
