"""
Tests de los repositorios: upsert atómico por clave primaria.
"""

import threading

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from app.db.models.event_result import EventResult
from app.db.models.prediction import Prediction
from app.db.models.user_statistics import UserStatistics
from app.db.repositories.event import EventRepository
from app.db.repositories.prediction import PredictionRepository
from app.db.repositories.user_statistics import UserStatisticsRepository
from app.db.session import Base


def stats(total, best=None):
    return UserStatistics(
        season_id=1, user_id=1, username="alice",
        total_points=total, best_results_points=best, predictions_count=1,
        exact_matches=0, one_off_matches=0, two_off_matches=0,
    )


def stored_total(db):
    db.expire_all()
    return UserStatisticsRepository(db).get_user_statistics(1, 1).total_points


def test_upsert_inserts_then_updates(db):
    repo = UserStatisticsRepository(db)

    inserted = repo.upsert_user_statistics(stats(10, best=8))
    updated = repo.upsert_user_statistics(stats(20))

    assert inserted is updated
    assert updated.total_points == 20
    assert updated.best_results_points is None
    assert len(repo.list_by_season(1)) == 1


def test_two_sessions_writing_same_row_last_write_wins(session_factory):
    a, b = session_factory(), session_factory()
    try:
        # A deja la fila preparada sin escribir; B inserta la misma clave antes
        staged = stats(10)
        a.add(staged)
        UserStatisticsRepository(b).upsert_user_statistics(stats(20))

        saved = UserStatisticsRepository(a).upsert_user_statistics(staged)

        assert saved.total_points == 10
        assert stored_total(b) == 10

        UserStatisticsRepository(b).upsert_user_statistics(stats(30))
        assert stored_total(a) == 30
    finally:
        a.close()
        b.close()


def test_concurrent_threads_never_fail_on_same_key(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'upserts.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    barrier = threading.Barrier(2)
    errors = []

    def writer(base):
        db = factory()
        try:
            barrier.wait()
            for i in range(20):
                UserStatisticsRepository(db).upsert_user_statistics(stats(base + i))
        except Exception as e:
            errors.append(e)
        finally:
            db.close()

    threads = [threading.Thread(target=writer, args=(base,)) for base in (100, 200)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert errors == []
    db = factory()
    rows = db.execute(select(UserStatistics)).scalars().all()
    assert len(rows) == 1
    assert rows[0].total_points in (119, 219)
    db.close()
    engine.dispose()


def test_upsert_of_loaded_prediction_keeps_other_columns(db, seed):
    seed.season(1)
    seed.user(1)
    seed.event(10)
    seed.prediction(10, 1, ("Verstappen", "Norris", "Leclerc"))
    repo = PredictionRepository(db)

    prediction = repo.list_predictions_by_event(10)[0]
    prediction.points_earned = 25
    saved = repo.upsert_prediction(prediction)

    assert saved.points_earned == 25
    assert saved.podium == ["Verstappen", "Norris", "Leclerc"]
    assert saved.submitted_at is not None


def test_upsert_new_prediction_applies_column_defaults(db):
    saved = PredictionRepository(db).upsert_prediction(
        Prediction(event_id=10, user_id=1, first_place_name="Verstappen")
    )

    assert saved.second_place_name == ""
    assert saved.points_earned is None
    assert saved.submitted_at is not None


def test_upsert_event_result_replaces_podium(db, seed):
    seed.result(10, ("Verstappen", "Norris", "Leclerc"))
    repo = EventRepository(db)

    repo.upsert_event_result(EventResult(
        event_id=10,
        first_place_name="Norris", second_place_name="Verstappen", third_place_name="Piastri",
    ))

    db.expire_all()
    assert repo.get_event_result(10).podium == ["Norris", "Verstappen", "Piastri"]
