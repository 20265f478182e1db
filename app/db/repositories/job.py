from typing import Optional

from app.db.models.recalculation_job import RecalculationJob
from app.db.repositories.base import BaseRepository


class JobRepository(BaseRepository):

    def get_job(self, job_id: str) -> Optional[RecalculationJob]:
        # populate_existing para no devolver la copia cacheada en la sesión
        return self.db.get(RecalculationJob, job_id, populate_existing=True)

    def save_job(self, job: RecalculationJob) -> RecalculationJob:
        self.db.add(job)
        self.commit()
        return job

    def update_job(self, job: RecalculationJob) -> RecalculationJob:
        return self._upsert(job)
