# app/db/models/prediction.py
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base


class Prediction(Base):
    __tablename__ = "predictions"

    # Un usuario solo puede hacer 1 predicción por evento
    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id"), primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), primary_key=True)

    first_place_id: Mapped[str] = mapped_column(String, default="")
    first_place_name: Mapped[str] = mapped_column(String, default="")
    second_place_id: Mapped[str] = mapped_column(String, default="")
    second_place_name: Mapped[str] = mapped_column(String, default="")
    third_place_id: Mapped[str] = mapped_column(String, default="")
    third_place_name: Mapped[str] = mapped_column(String, default="")

    # None hasta que el evento tenga resultado. Se sobrescribe en cada recálculo
    points_earned: Mapped[int | None] = mapped_column(Integer, nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def podium(self) -> list[str]:
        return [self.first_place_name, self.second_place_name, self.third_place_name]
