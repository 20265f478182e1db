"""
Recálculo completo de las estadísticas de una temporada en segundo plano.

start_recalculation() crea el job (ya en Running), lanza el trabajo en un
hilo aparte y devuelve el job_id al momento. El hilo solo se comunica con
el exterior escribiendo en el registro del job: total_users, processed_users
tras cada usuario y el estado final (Completed o Failed). Quien lanzó el job
hace polling con get_job_status().

No hay bloqueos entre jobs: si se lanzan dos para la misma temporada, la
última escritura de cada fila UserStatistics es la que queda.
"""

import logging
import threading
import uuid
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional

from sqlalchemy.orm import Session, sessionmaker

from app.db.models.recalculation_job import JobStatus, RecalculationJob
from app.db.models.user_statistics import UserStatistics
from app.db.repositories.event import EventRepository
from app.db.repositories.job import JobRepository
from app.db.repositories.prediction import PredictionRepository
from app.db.repositories.season import SeasonRepository
from app.db.repositories.user import UserRepository
from app.db.repositories.user_statistics import UserStatisticsRepository
from app.services.scoring import best_results_points, classify_matches

logger = logging.getLogger(__name__)


class ScoredPrediction(NamedTuple):
    event_id: int
    points_earned: int
    podium: List[str]


def spawn_thread(target: Callable, *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


class StatisticsRecalculationService:

    def __init__(
        self,
        session_factory: sessionmaker,
        spawn: Callable = spawn_thread,
    ):
        self.session_factory = session_factory
        self.spawn = spawn

    def start_recalculation(self, season_id: int) -> str:
        job_id = str(uuid.uuid4())

        db = self.session_factory()
        try:
            job = RecalculationJob(
                job_id=job_id,
                season_id=season_id,
                status=JobStatus.PENDING,
                total_users=0,
                processed_users=0,
                started_at=datetime.utcnow(),
            )
            # Se persiste ya en Running: quien haga polling siempre encuentra el job
            job.status = JobStatus.RUNNING
            JobRepository(db).save_job(job)
        finally:
            db.close()

        logger.info("Job %s creado para la temporada %s", job_id, season_id)

        self.spawn(self.process_recalculation, job_id, season_id)
        return job_id

    def get_job_status(self, job_id: str) -> Optional[RecalculationJob]:
        db = self.session_factory()
        try:
            job = JobRepository(db).get_job(job_id)
            if job is not None:
                # Desenganchamos el objeto para poder leerlo con la sesión cerrada
                db.expunge(job)
            return job
        finally:
            db.close()

    def process_recalculation(self, job_id: str, season_id: int) -> None:
        """Cuerpo del job. Nunca lanza: cualquier error acaba en status=Failed."""
        db = self.session_factory()
        jobs = JobRepository(db)
        try:
            self._aggregate_season(db, jobs, job_id, season_id)

            job = jobs.get_job(job_id)
            if job is not None:
                job.status = JobStatus.COMPLETED
                job.completed_at = datetime.utcnow()
                jobs.update_job(job)

            logger.info("Job %s completado", job_id)

        except Exception as e:
            logger.exception("Job %s fallido (temporada %s)", job_id, season_id)
            self._mark_failed(jobs, job_id, str(e))
        finally:
            db.close()

    def _aggregate_season(self, db: Session, jobs: JobRepository, job_id: str, season_id: int) -> None:
        events_repo = EventRepository(db)
        predictions_repo = PredictionRepository(db)
        users_repo = UserRepository(db)
        stats_repo = UserStatisticsRepository(db)

        season = SeasonRepository(db).get_season(season_id)
        best_n = season.best_results_number if season else None

        event_ids = [e.id for e in events_repo.list_events_by_season(season_id)]
        predictions = predictions_repo.list_scored_predictions_for_season(season_id, event_ids)

        # Copia en memoria: cada upsert hace commit y caduca los objetos de la sesión
        by_user: Dict[int, List[ScoredPrediction]] = {}
        for p in predictions:
            if p.points_earned is None:
                continue
            by_user.setdefault(p.user_id, []).append(
                ScoredPrediction(p.event_id, p.points_earned, p.podium)
            )

        job = jobs.get_job(job_id)
        if job is not None:
            job.total_users = len(by_user)
            jobs.update_job(job)

        logger.info(
            "Job %s: %s predicciones puntuadas de %s usuarios",
            job_id, len(predictions), len(by_user),
        )

        # Cache de resultados: muchos usuarios comparten los mismos eventos
        results = {}
        processed = 0

        for user_id, user_predictions in by_user.items():
            total_points = 0
            exact = one_off = two_off = 0
            points_list = []

            for prediction in user_predictions:
                total_points += prediction.points_earned
                points_list.append(prediction.points_earned)

                if prediction.event_id not in results:
                    result = events_repo.get_event_result(prediction.event_id)
                    results[prediction.event_id] = result.podium if result else None
                actual_podium = results[prediction.event_id]

                if actual_podium is not None:
                    matches = classify_matches(prediction.podium, actual_podium)
                    exact += matches.exact_matches
                    one_off += matches.one_off_matches
                    two_off += matches.two_off_matches

            user = users_repo.get_user(user_id)
            if user is None:
                logger.warning("Job %s: usuario %s no existe, se usa su id como nombre", job_id, user_id)
            username = user.username if user else str(user_id)

            stats_repo.upsert_user_statistics(UserStatistics(
                season_id=season_id,
                user_id=user_id,
                username=username,
                total_points=total_points,
                best_results_points=best_results_points(points_list, best_n),
                predictions_count=len(user_predictions),
                exact_matches=exact,
                one_off_matches=one_off,
                two_off_matches=two_off,
                last_updated=datetime.utcnow(),
            ))

            processed += 1
            job = jobs.get_job(job_id)
            if job is not None:
                job.processed_users = processed
                jobs.update_job(job)

    def _mark_failed(self, jobs: JobRepository, job_id: str, message: str) -> None:
        try:
            jobs.rollback()
            job = jobs.get_job(job_id)
            if job is not None:
                job.status = JobStatus.FAILED
                job.completed_at = datetime.utcnow()
                job.error_message = message
                jobs.update_job(job)
        except Exception:
            # Si ni siquiera se puede escribir el fallo, el job queda en Running
            logger.exception("Job %s: no se pudo guardar el estado Failed", job_id)
