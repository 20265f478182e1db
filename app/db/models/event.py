# app/db/models/event.py
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.session import Base


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season_id: Mapped[int] = mapped_column(Integer, ForeignKey("seasons.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    event_datetime: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Relaciones
    season: Mapped["Season"] = relationship("Season", back_populates="events")
