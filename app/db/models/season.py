from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, TYPE_CHECKING
from app.db.session import Base

if TYPE_CHECKING:
    from app.db.models.event import Event


class Season(Base):
    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)

    # "Best-N": solo cuentan los N mejores resultados de cada usuario (None = todos)
    best_results_number: Mapped[int | None] = mapped_column(Integer, nullable=True)

    events: Mapped[List["Event"]] = relationship("Event", back_populates="season")
