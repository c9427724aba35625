from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class TieBreakPolicy(str, Enum):
    """Cómo se elige ganador cuando varios empatan en la distancia máxima"""

    FIRST_SEEN = "first_seen"          # El primero en alcanzar el máximo
    LOWEST_USER_ID = "lowest_user_id"  # El user_id lexicográficamente menor


class OutcomeStatus(str, Enum):
    AWARDED = "awarded"
    SKIPPED_EMPTY = "skipped_empty"      # Sin actividades en la ventana
    NO_WINNER = "no_winner"              # Nadie con distancia > 0
    ALREADY_AWARDED = "already_awarded"  # Bonus ya existente para la ventana
    ERROR = "error"


class RewardSpec(BaseModel):
    """Premio a repartir en una ejecución"""

    points: int
    label: str


class LeagueOutcome(BaseModel):
    """Resultado del reparto en una liga"""

    league_id: str
    league_name: str
    status: OutcomeStatus

    winner_id: Optional[str] = None
    winner_distance_km: Optional[float] = None
    margin_km: Optional[float] = None  # Ventaja sobre el segundo
    bonus_id: Optional[str] = None
    error: Optional[str] = None


class DistributionReport(BaseModel):
    """Resumen de una ejecución completa del reparto"""

    window_start: datetime
    run_at: datetime
    reward: RewardSpec
    outcomes: list[LeagueOutcome] = Field(default_factory=list)

    @property
    def awarded(self) -> list[LeagueOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.AWARDED]

    @property
    def failed(self) -> list[LeagueOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.ERROR]
