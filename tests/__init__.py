"""
Utilidades compartidas por los tests (fixtures en conftest.py).
"""

import os

# Antes de importar app.*: el engine global no debe crear podium.db en disco
os.environ.setdefault("DATABASE_URL", "sqlite://")

from app.db.models.event import Event
from app.db.models.event_result import EventResult
from app.db.models.prediction import Prediction
from app.db.models.season import Season
from app.db.models.user import User


def run_inline(target, *args):
    """Sustituto de spawn_thread: ejecuta el job en el mismo hilo."""
    target(*args)


class Seeder:
    """Atajos para crear datos de prueba con commit inmediato."""

    def __init__(self, db):
        self.db = db

    def _add(self, obj):
        self.db.add(obj)
        self.db.commit()
        return obj

    def season(self, season_id=1, best_n=None, year=2025):
        return self._add(Season(
            id=season_id, year=year, name=f"Temporada {year}",
            is_active=True, best_results_number=best_n,
        ))

    def user(self, user_id, username=None, role="user"):
        username = username or f"user{user_id}"
        return self._add(User(id=user_id, email=f"{username}@example.com", username=username, role=role))

    def event(self, event_id, season_id=1, name=None):
        return self._add(Event(id=event_id, season_id=season_id, name=name or f"GP {event_id}"))

    def result(self, event_id, podium):
        first, second, third = podium
        return self._add(EventResult(
            event_id=event_id,
            first_place_id=first[:3].upper(), first_place_name=first,
            second_place_id=second[:3].upper(), second_place_name=second,
            third_place_id=third[:3].upper(), third_place_name=third,
        ))

    def prediction(self, event_id, user_id, podium, points=None):
        first, second, third = podium
        return self._add(Prediction(
            event_id=event_id, user_id=user_id,
            first_place_name=first, second_place_name=second, third_place_name=third,
            points_earned=points,
        ))


