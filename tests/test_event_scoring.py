"""
Tests de ScoringService: recálculo de puntos de un evento y registro de resultados.
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import EventNotFoundException
from app.db.models.prediction import Prediction
from app.db.models.scoring_rules import ScoringRules
from app.db.repositories.base import BaseRepository
from app.db.repositories.prediction import PredictionRepository
from app.services.event_scoring import ScoringService, ScoringStatus

PODIUM = ("Verstappen", "Norris", "Leclerc")


@pytest.fixture
def event_with_predictions(seed):
    seed.season(1)
    for uid in (1, 2, 3, 4):
        seed.user(uid)
    seed.event(10)
    seed.prediction(10, 1, ("Verstappen", "Norris", "Leclerc"))
    seed.prediction(10, 2, ("Norris", "Verstappen", "Leclerc"))
    seed.prediction(10, 3, ("Verstappen", "Norris", "Hamilton"))
    seed.prediction(10, 4, ("Verstappen", "Hamilton", "Russell"))


def points_by_user(db, event_id):
    db.expire_all()
    return {
        p.user_id: p.points_earned
        for p in PredictionRepository(db).list_predictions_by_event(event_id)
    }


def test_no_result_is_a_successful_noop(db, event_with_predictions):
    outcome = ScoringService(db).recalculate_event_predictions(10, 1)

    assert outcome.status == ScoringStatus.NO_RESULT
    assert outcome
    assert outcome.predictions_scored == 0
    assert set(points_by_user(db, 10).values()) == {None}


def test_scores_every_prediction_with_default_rules(db, seed, event_with_predictions):
    seed.result(10, PODIUM)

    outcome = ScoringService(db).recalculate_event_predictions(10, 1)

    assert outcome.status == ScoringStatus.SCORED
    assert outcome.predictions_scored == 4
    assert points_by_user(db, 10) == {1: 25, 2: 18, 3: 15, 4: 0}


def test_uses_season_rules_when_configured(db, seed, event_with_predictions):
    seed.result(10, PODIUM)
    db.add(ScoringRules(season_id=1, exact_match_points=10, one_off_points=6, two_off_points=3))
    db.commit()

    ScoringService(db).recalculate_event_predictions(10, 1)

    assert points_by_user(db, 10) == {1: 10, 2: 6, 3: 3, 4: 0}


def test_recalculation_is_idempotent(db, seed, event_with_predictions):
    seed.result(10, PODIUM)
    service = ScoringService(db)

    service.recalculate_event_predictions(10, 1)
    first = points_by_user(db, 10)
    service.recalculate_event_predictions(10, 1)

    assert points_by_user(db, 10) == first


def test_recalculation_overwrites_previous_points(db, seed):
    seed.season(1)
    seed.user(1)
    seed.event(10)
    seed.prediction(10, 1, PODIUM, points=99)
    seed.result(10, ("Norris", "Verstappen", "Leclerc"))

    ScoringService(db).recalculate_event_predictions(10, 1)

    assert points_by_user(db, 10) == {1: 18}


def test_calculate_points_resolves_season_rules(db, seed):
    seed.season(1)
    db.add(ScoringRules(season_id=1, exact_match_points=30, one_off_points=20, two_off_points=10))
    db.commit()
    service = ScoringService(db)

    assert service.calculate_points(1, PODIUM, PODIUM) == 30
    # Temporada sin reglas: valores por defecto
    assert service.calculate_points(2, PODIUM, PODIUM) == 25


def test_store_failure_returns_failed_outcome_and_keeps_partial_writes(db, seed, event_with_predictions):
    seed.result(10, PODIUM)
    original_upsert = PredictionRepository.upsert_prediction
    calls = {"n": 0}

    def flaky_upsert(self, prediction):
        calls["n"] += 1
        if calls["n"] == 3:
            raise OperationalError("UPDATE predictions", {}, Exception("disk I/O error"))
        return original_upsert(self, prediction)

    with patch.object(PredictionRepository, "upsert_prediction", flaky_upsert):
        outcome = ScoringService(db).recalculate_event_predictions(10, 1)

    assert not outcome
    assert outcome.status == ScoringStatus.FAILED
    assert outcome.predictions_scored == 2
    assert "disk I/O error" in outcome.error

    # Las dos primeras se quedan escritas; no hay rollback global
    points = points_by_user(db, 10)
    assert points[1] == 25
    assert points[2] == 18
    assert points[3] is None


def test_record_event_result_saves_and_scores(db, event_with_predictions):
    podium = [
        {"id": "VER", "name": "Verstappen"},
        {"id": "NOR", "name": "Norris"},
        {"id": "LEC", "name": "Leclerc"},
    ]

    outcome = ScoringService(db).record_event_result(10, podium)

    assert outcome.status == ScoringStatus.SCORED
    result = ScoringService(db).events.get_event_result(10)
    assert result.first_place_id == "VER"
    assert result.podium == list(PODIUM)
    assert points_by_user(db, 10) == {1: 25, 2: 18, 3: 15, 4: 0}


def test_correcting_a_result_rescores(db, seed, event_with_predictions):
    service = ScoringService(db)
    service.record_event_result(10, [{"name": n} for n in PODIUM])

    service.record_event_result(10, [{"name": n} for n in ("Norris", "Verstappen", "Leclerc")])

    assert points_by_user(db, 10) == {1: 18, 2: 25, 3: 15, 4: 0}


def test_record_event_result_unknown_event(db):
    with pytest.raises(EventNotFoundException):
        ScoringService(db).record_event_result(999, [{"name": "Verstappen"}])


def test_prediction_podium_property():
    p = Prediction(first_place_name="A", second_place_name="B", third_place_name="C")
    assert p.podium == ["A", "B", "C"]


def test_store_failure_rolls_back_through_repository(db, seed, event_with_predictions):
    seed.result(10, PODIUM)
    failure = OperationalError("UPDATE predictions", {}, Exception("database is locked"))

    with patch.object(PredictionRepository, "upsert_prediction", side_effect=failure), \
            patch.object(BaseRepository, "rollback", autospec=True) as rollback:
        outcome = ScoringService(db).recalculate_event_predictions(10, 1)

    assert outcome.status == ScoringStatus.FAILED
    rollback.assert_called_once()
