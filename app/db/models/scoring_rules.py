# app/db/models/scoring_rules.py
from datetime import datetime
from sqlalchemy import Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base


class ScoringRules(Base):
    __tablename__ = "scoring_rules"

    # Una configuración de puntos por temporada
    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), primary_key=True)
    exact_match_points: Mapped[int] = mapped_column(Integer, nullable=False)
    one_off_points: Mapped[int] = mapped_column(Integer, nullable=False)
    two_off_points: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
