from .league import League
from .activity import Activity, BonusActivityCreate
from .reward import (
    DistributionReport,
    LeagueOutcome,
    OutcomeStatus,
    RewardSpec,
    TieBreakPolicy,
)

__all__ = [
    "League",
    "Activity",
    "BonusActivityCreate",
    "DistributionReport",
    "LeagueOutcome",
    "OutcomeStatus",
    "RewardSpec",
    "TieBreakPolicy",
]
