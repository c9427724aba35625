from .league_repository import LeagueRepository
from .activity_repository import ActivityRepository

__all__ = [
    "LeagueRepository",
    "ActivityRepository",
]
