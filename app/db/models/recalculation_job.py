# app/db/models/recalculation_job.py
from sqlalchemy import String, Integer, DateTime, Enum as SqEnum
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
import enum
from app.db.session import Base


class JobStatus(str, enum.Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"


class RecalculationJob(Base):
    __tablename__ = "statistics_recalculation_jobs"

    job_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    season_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    status: Mapped[JobStatus] = mapped_column(
        SqEnum(JobStatus, values_callable=lambda e: [m.value for m in e]),
        default=JobStatus.PENDING,
    )

    # Progreso: se guarda en cada usuario procesado para poder hacer polling
    total_users: Mapped[int] = mapped_column(Integer, default=0)
    processed_users: Mapped[int] = mapped_column(Integer, default=0)

    started_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    error_message: Mapped[str | None] = mapped_column(String, nullable=True)

    @property
    def is_finished(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.FAILED)
