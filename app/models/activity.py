from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class Activity(BaseModel):
    """Actividad registrada por un usuario en una liga (o bonus sintético)"""

    id: Optional[str] = Field(None, alias="_id")

    user_id: str
    league_id: str
    date: datetime

    distance_km: float = 0.0
    duration_seconds: int = 0

    points_earned: int = 0
    points_breakdown: list[str] = Field(default_factory=list)

    is_bonus: bool = False
    window_start: Optional[datetime] = None  # Solo en bonus: ventana premiada

    @field_validator("id", "user_id", "league_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value):
        return None if value is None else str(value)

    @field_validator("distance_km", "duration_seconds", "points_earned", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        # Documentos antiguos guardan null en vez de omitir el campo
        return 0 if value is None else value

    @property
    def counts_for_ranking(self) -> bool:
        """Solo suman las actividades reales con distancia positiva"""
        return not self.is_bonus and self.distance_km > 0

    class Config:
        populate_by_name = True


class BonusActivityCreate(BaseModel):
    """Datos para crear el registro de bonus del ganador"""

    user_id: str
    league_id: str
    date: datetime

    points_earned: int
    label: str
    window_start: datetime

    def to_document(self) -> dict:
        return {
            "user_id": self.user_id,
            "league_id": self.league_id,
            "date": self.date,
            "distance_km": 0,
            "duration_seconds": 0,
            "points_earned": self.points_earned,
            "points_breakdown": [self.label],
            "is_bonus": True,
            "window_start": self.window_start,
        }
