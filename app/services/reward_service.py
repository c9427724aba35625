"""
RewardDistributor - Reparto de premios al líder de cada liga.

Para una ventana [window_start, ahora) y un premio:
1. Lee todas las ligas
2. Por cada liga suma la distancia de cada usuario en la ventana
3. Elige al líder y le añade un registro de actividad "bonus"

Un fallo en una liga no impide evaluar las demás; al final, si alguna liga
falló, se lanza RewardDistributionError con el informe completo.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import Settings
from app.models.activity import BonusActivityCreate
from app.models.league import League
from app.models.reward import (
    DistributionReport,
    LeagueOutcome,
    OutcomeStatus,
    RewardSpec,
    TieBreakPolicy,
)
from app.repositories.activity_repository import ActivityRepository
from app.repositories.league_repository import LeagueRepository
from app.services.ranking_service import aggregate_distances, runner_up_margin, select_winner

logger = logging.getLogger(__name__)


class RewardServiceError(Exception):
    """Base exception for reward service errors."""
    pass


class RewardDistributionError(RewardServiceError):
    """Raised after a run in which one or more leagues failed."""

    def __init__(self, report: DistributionReport):
        self.report = report
        failed = ", ".join(f"{o.league_id} ({o.error})" for o in report.failed)
        super().__init__(
            f"{len(report.failed)} of {len(report.outcomes)} leagues failed: {failed}"
        )


class RewardDistributor:
    def __init__(
        self,
        league_repo: LeagueRepository,
        activity_repo: ActivityRepository,
        tie_break_policy: TieBreakPolicy = TieBreakPolicy.LOWEST_USER_ID,
        idempotent: bool = True,
        league_concurrency: int = 1,
    ):
        if league_concurrency < 1:
            raise ValueError("league_concurrency must be >= 1")

        self.league_repo = league_repo
        self.activity_repo = activity_repo
        self.tie_break_policy = tie_break_policy
        self.idempotent = idempotent
        self.league_concurrency = league_concurrency

    @classmethod
    def from_db(cls, db: AsyncIOMotorDatabase, settings: Settings) -> "RewardDistributor":
        """Construye el distribuidor sobre una conexión ya abierta"""
        return cls(
            LeagueRepository(db),
            ActivityRepository(db),
            tie_break_policy=TieBreakPolicy(settings.tie_break_policy),
            idempotent=settings.reward_idempotency,
            league_concurrency=settings.league_concurrency,
        )

    async def distribute(
        self,
        window_start: datetime,
        reward_points: int,
        reward_label: str,
        now: Optional[datetime] = None,
    ) -> DistributionReport:
        """
        Reparte el premio en todas las ligas para la ventana [window_start, now).

        Returns:
            DistributionReport con un LeagueOutcome por liga

        Raises:
            RewardDistributionError: si alguna liga falló (las demás se procesan igual)
        """
        run_at = now or datetime.now(timezone.utc)
        reward = RewardSpec(points=reward_points, label=reward_label)

        logger.info(f"🏁 Reparto '{reward_label}' desde {window_start.isoformat()}")

        leagues = await self.league_repo.get_all()

        if self.league_concurrency == 1:
            outcomes = [
                await self._process_league_safely(league, window_start, reward, run_at)
                for league in leagues
            ]
        else:
            semaphore = asyncio.Semaphore(self.league_concurrency)

            async def bounded(league: League) -> LeagueOutcome:
                async with semaphore:
                    return await self._process_league_safely(league, window_start, reward, run_at)

            outcomes = list(await asyncio.gather(*(bounded(league) for league in leagues)))

        report = DistributionReport(
            window_start=window_start,
            run_at=run_at,
            reward=reward,
            outcomes=outcomes,
        )

        logger.info(
            f"✅ Reparto '{reward_label}' terminado: {len(leagues)} ligas, "
            f"{len(report.awarded)} premiadas, {len(report.failed)} con error"
        )

        if report.failed:
            raise RewardDistributionError(report)

        return report

    async def _process_league_safely(
        self,
        league: League,
        window_start: datetime,
        reward: RewardSpec,
        run_at: datetime,
    ) -> LeagueOutcome:
        try:
            return await self.process_league(league, window_start, reward, run_at)
        except Exception as exc:
            logger.exception(f"❌ Error repartiendo premio en liga {league.id}")
            return LeagueOutcome(
                league_id=league.id,
                league_name=league.name,
                status=OutcomeStatus.ERROR,
                error=f"{type(exc).__name__}: {exc}",
            )

    async def process_league(
        self,
        league: League,
        window_start: datetime,
        reward: RewardSpec,
        run_at: datetime,
    ) -> LeagueOutcome:
        """Agrega la ventana de una liga y, si hay líder, escribe su bonus"""
        activities = await self.activity_repo.get_league_activities_since(league.id, window_start)

        if not activities:
            logger.debug(f"Liga {league.name}: sin actividades en la ventana")
            return LeagueOutcome(
                league_id=league.id,
                league_name=league.name,
                status=OutcomeStatus.SKIPPED_EMPTY,
            )

        ranking = aggregate_distances(activities)
        leader = select_winner(ranking, self.tie_break_policy)

        if leader is None or leader[1] <= 0:
            logger.info(f"Liga {league.name}: nadie con distancia, sin premio")
            return LeagueOutcome(
                league_id=league.id,
                league_name=league.name,
                status=OutcomeStatus.NO_WINNER,
            )

        winner_id, distance = leader

        if self.idempotent:
            existing = await self.activity_repo.find_bonus(league.id, window_start, reward.label)
            if existing is not None:
                logger.info(
                    f"Liga {league.name}: '{reward.label}' ya entregado a {existing.user_id}, se omite"
                )
                # Sin distancias: las de esta ejecución no son las del premiado
                return LeagueOutcome(
                    league_id=league.id,
                    league_name=league.name,
                    status=OutcomeStatus.ALREADY_AWARDED,
                    winner_id=existing.user_id,
                    bonus_id=existing.id,
                )

        bonus = await self.activity_repo.add_bonus(BonusActivityCreate(
            user_id=winner_id,
            league_id=league.id,
            date=run_at,
            points_earned=reward.points,
            label=reward.label,
            window_start=window_start,
        ))
        margin = runner_up_margin(ranking, winner_id)
        outcome = LeagueOutcome(
            league_id=league.id,
            league_name=league.name,
            status=OutcomeStatus.AWARDED,
            winner_id=winner_id,
            winner_distance_km=distance,
            margin_km=margin,
            bonus_id=bonus.id,
        )

        margin_text = f"+{margin:.2f} km" if margin is not None else "sin rival"
        logger.info(
            f"🏆 Ganador en {league.name}: {winner_id} con {distance:.2f} km "
            f"({margin_text}) -> {reward.label}"
        )
        return outcome
