"""
Ranking de una liga dentro de una ventana - cálculo puro, sin base de datos.
"""

from typing import Iterable, Optional

from app.models.activity import Activity
from app.models.reward import TieBreakPolicy


def aggregate_distances(activities: Iterable[Activity]) -> dict[str, float]:
    """
    Suma la distancia por usuario.

    Solo cuentan las actividades reales (no bonus) con distancia > 0, así un
    bonus de una ventana nunca infla el total de la siguiente. Los usuarios sin
    actividades válidas no aparecen. El orden de las claves es el orden en que
    se vio a cada usuario por primera vez.
    """
    ranking: dict[str, float] = {}
    for activity in activities:
        if not activity.counts_for_ranking:
            continue
        ranking[activity.user_id] = ranking.get(activity.user_id, 0.0) + activity.distance_km
    return ranking


def select_winner(
    ranking: dict[str, float],
    policy: TieBreakPolicy = TieBreakPolicy.LOWEST_USER_ID
) -> Optional[tuple[str, float]]:
    """
    Devuelve (user_id, distancia) del líder, o None si el ranking está vacío.

    FIRST_SEEN: gana quien supera estrictamente el máximo actual primero, un
    empate posterior no desbanca al que ya iba primero.
    LOWEST_USER_ID: entre los empatados en el máximo gana el user_id menor.
    """
    if not ranking:
        return None

    if policy == TieBreakPolicy.FIRST_SEEN:
        winner_id: Optional[str] = None
        max_distance = float("-inf")
        for user_id, distance in ranking.items():
            if distance > max_distance:
                winner_id, max_distance = user_id, distance
        return winner_id, max_distance

    max_distance = max(ranking.values())
    winner_id = min(uid for uid, dist in ranking.items() if dist == max_distance)
    return winner_id, max_distance


def runner_up_margin(ranking: dict[str, float], winner_id: str) -> Optional[float]:
    """Ventaja del ganador sobre el segundo (None si compitió solo)"""
    others = [dist for uid, dist in ranking.items() if uid != winner_id]
    if not others:
        return None
    return ranking[winner_id] - max(others)
