# app/db/models/event_result.py
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base


class EventResult(Base):
    """Podio real de un evento. Como mucho uno por evento."""
    __tablename__ = "event_results"

    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id"), primary_key=True)

    first_place_id: Mapped[str] = mapped_column(String, default="")
    first_place_name: Mapped[str] = mapped_column(String, default="")
    second_place_id: Mapped[str] = mapped_column(String, default="")
    second_place_name: Mapped[str] = mapped_column(String, default="")
    third_place_id: Mapped[str] = mapped_column(String, default="")
    third_place_name: Mapped[str] = mapped_column(String, default="")

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def podium(self) -> list[str]:
        return [self.first_place_name, self.second_place_name, self.third_place_name]
