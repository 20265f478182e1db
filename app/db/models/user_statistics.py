# app/db/models/user_statistics.py
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base


class UserStatistics(Base):
    """
    Agregado de un usuario en una temporada.
    Se reconstruye entero en cada recálculo (no se suma sobre lo anterior),
    así que relanzar el job con los mismos datos deja las mismas filas.
    """
    __tablename__ = "user_statistics"

    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), primary_key=True)

    username: Mapped[str] = mapped_column(String, default="")
    total_points: Mapped[int] = mapped_column(Integer, default=0)
    # Solo si la temporada tiene best-N. Si es None, el ranking usa total_points
    best_results_points: Mapped[int | None] = mapped_column(Integer, nullable=True)
    predictions_count: Mapped[int] = mapped_column(Integer, default=0)

    # Desglose por piloto (diferencia de posición), no cuadra con los puntos
    exact_matches: Mapped[int] = mapped_column(Integer, default=0)
    one_off_matches: Mapped[int] = mapped_column(Integer, default=0)
    two_off_matches: Mapped[int] = mapped_column(Integer, default=0)

    last_updated: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def ranking_points(self) -> int:
        if self.best_results_points is not None:
            return self.best_results_points
        return self.total_points
