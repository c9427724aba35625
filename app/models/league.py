from pydantic import BaseModel, Field, field_validator


class League(BaseModel):
    """Liga: grupo de usuarios que compiten por distancia acumulada"""

    id: str = Field(..., alias="_id")
    name: str = "Unknown"

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        # Las ligas creadas desde la app pueden tener ObjectId
        return str(value)

    class Config:
        populate_by_name = True
