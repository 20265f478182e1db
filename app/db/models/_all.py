# Importa todos los modelos para que Base.metadata los conozca antes de create_all
from app.db.models.user import User
from app.db.models.season import Season
from app.db.models.event import Event
from app.db.models.event_result import EventResult
from app.db.models.prediction import Prediction
from app.db.models.scoring_rules import ScoringRules
from app.db.models.user_statistics import UserStatistics
from app.db.models.recalculation_job import RecalculationJob, JobStatus
