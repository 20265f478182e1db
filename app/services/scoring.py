"""
Lógica pura de puntuación de podios.

Aquí no se toca la base de datos: se comparan listas [P1, P2, P3] de nombres.
La comparación ignora mayúsculas y espacios, y una casilla vacía o None
cuenta como "sin predicción" para esa posición.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

from app.core.config import settings


@dataclass(frozen=True)
class ScoringValues:
    exact_match_points: int
    one_off_points: int
    two_off_points: int


DEFAULT_SCORING = ScoringValues(
    exact_match_points=settings.DEFAULT_EXACT_MATCH_POINTS,
    one_off_points=settings.DEFAULT_ONE_OFF_POINTS,
    two_off_points=settings.DEFAULT_TWO_OFF_POINTS,
)


class MatchBreakdown(NamedTuple):
    exact_matches: int = 0
    one_off_matches: int = 0
    two_off_matches: int = 0


def normalize_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


def normalize_podium(entries: Sequence[Optional[str]]) -> list[str]:
    """
    Devuelve siempre 3 nombres normalizados [P1, P2, P3].
    Si faltan posiciones se rellenan con "".
    """
    podium = [normalize_name(e) for e in list(entries)[:3]]
    return podium + [""] * (3 - len(podium))


def calculate_points(
    predicted: Sequence[Optional[str]],
    actual: Sequence[Optional[str]],
    rules: ScoringValues = DEFAULT_SCORING,
) -> int:
    pred = normalize_podium(predicted)
    real = normalize_podium(actual)

    # Podio exacto: los 3 en su sitio
    if pred == real:
        return rules.exact_match_points

    # Cuántos pilotos predichos están en el podio real, sin mirar la posición
    pred_set = {p for p in pred if p}
    real_set = {r for r in real if r}
    correct_drivers = len(pred_set & real_set)

    if correct_drivers == 3:
        return rules.one_off_points
    if correct_drivers == 2:
        return rules.two_off_points

    # Un solo acierto no puntúa
    return 0


def classify_matches(
    predicted: Sequence[Optional[str]],
    actual: Sequence[Optional[str]],
) -> MatchBreakdown:
    """
    Desglose por piloto para las estadísticas: para cada piloto predicho
    se mira a cuántas posiciones quedó de donde se predijo (0, 1 o 2).

    OJO: no usa el mismo criterio que calculate_points. Un podio con los
    3 pilotos pero todos cambiados de sitio vale one_off_points y aquí
    puede dar 0 aciertos exactos.
    """
    pred = normalize_podium(predicted)
    real = normalize_podium(actual)

    counts = [0, 0, 0]
    for pred_pos, driver in enumerate(pred):
        if not driver:
            continue

        # Primera posición real donde aparece el piloto
        real_pos = next((i for i, r in enumerate(real) if r == driver), None)
        if real_pos is None:
            continue

        counts[abs(pred_pos - real_pos)] += 1

    return MatchBreakdown(*counts)


def best_results_points(points: Sequence[int], best_n: Optional[int]) -> Optional[int]:
    """Suma de los N mejores resultados. None si la temporada no tiene best-N."""
    if not best_n or best_n <= 0:
        return None
    return sum(sorted(points, reverse=True)[:best_n])


def resolve_scoring_rules(rules_repo, season_id: int) -> ScoringValues:
    rules = rules_repo.get_rules_for_season(season_id)
    if rules is None:
        # Temporada sin configurar: valores por defecto
        return DEFAULT_SCORING

    return ScoringValues(
        exact_match_points=rules.exact_match_points,
        one_off_points=rules.one_off_points,
        two_off_points=rules.two_off_points,
    )
