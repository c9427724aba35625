"""
Programación de los repartos semanal y mensual

- Semanal: domingos 23:59, ventana móvil de 7x24h
- Mensual: día 1 a las 00:00, ventana = mes natural anterior completo

Ambos delegan en RewardDistributor con su premio configurado.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import Settings
from app.models.reward import DistributionReport
from app.services.reward_service import RewardDistributor

logger = logging.getLogger(__name__)

WEEKLY_JOB_ID = "weekly_league_rewards"
MONTHLY_JOB_ID = "monthly_league_rewards"


# ============================================
# 📅 VENTANAS
# ============================================

def weekly_window_start(fired_at: datetime) -> datetime:
    """Exactamente 7x24h antes (en UTC, para que un cambio de hora no la alargue)"""
    if fired_at.tzinfo is None:
        return fired_at - timedelta(days=7)
    start_utc = fired_at.astimezone(timezone.utc) - timedelta(days=7)
    return start_utc.astimezone(fired_at.tzinfo)


def monthly_window_start(fired_at: datetime) -> datetime:
    """Día 1 del mes anterior a las 00:00:00, en la zona horaria de fired_at"""
    if fired_at.month == 1:
        year, month = fired_at.year - 1, 12
    else:
        year, month = fired_at.year, fired_at.month - 1

    return fired_at.replace(
        year=year, month=month, day=1,
        hour=0, minute=0, second=0, microsecond=0
    )


# ============================================
# 🎯 TRIGGERS
# ============================================

def _fired_at(settings: Settings, fired_at: Optional[datetime]) -> datetime:
    """
    Hora de disparo en la zona de los premios, truncada al minuto

    APScheduler no pasa la hora programada; truncando, una ejecución programada
    y un relanzamiento manual del mismo minuto dan la misma ventana
    """
    tz = ZoneInfo(settings.rewards_timezone)
    if fired_at is None:
        fired_at = datetime.now(tz)
    elif fired_at.tzinfo is None:
        fired_at = fired_at.replace(tzinfo=tz)
    else:
        fired_at = fired_at.astimezone(tz)
    return fired_at.replace(second=0, microsecond=0)


async def run_weekly_rewards(
    db: AsyncIOMotorDatabase,
    settings: Settings,
    fired_at: Optional[datetime] = None
) -> DistributionReport:
    """Reparto semanal: premia al líder de los últimos 7 días"""
    fired_at = _fired_at(settings, fired_at)
    logger.info("🏆 SEMANAL: Iniciando reparto...")

    distributor = RewardDistributor.from_db(db, settings)
    report = await distributor.distribute(
        weekly_window_start(fired_at),
        settings.weekly_reward_points,
        settings.weekly_reward_label,
        now=fired_at,
    )

    logger.info("✅ SEMANAL: Finalizado.")
    return report


async def run_monthly_rewards(
    db: AsyncIOMotorDatabase,
    settings: Settings,
    fired_at: Optional[datetime] = None
) -> DistributionReport:
    """Reparto mensual: premia al líder del mes natural anterior"""
    fired_at = _fired_at(settings, fired_at)
    logger.info("🌟 MENSUAL: Iniciando reparto...")

    distributor = RewardDistributor.from_db(db, settings)
    report = await distributor.distribute(
        monthly_window_start(fired_at),
        settings.monthly_reward_points,
        settings.monthly_reward_label,
        now=fired_at,
    )

    logger.info("✅ MENSUAL: Finalizado.")
    return report


# ============================================
# ⏰ SCHEDULER
# ============================================

def build_scheduler(db: AsyncIOMotorDatabase, settings: Settings) -> AsyncIOScheduler:
    """
    Crea (sin arrancar) el scheduler con los dos repartos

    max_instances=1 evita que una ejecución lenta se solape con la siguiente
    """
    tz = ZoneInfo(settings.rewards_timezone)
    scheduler = AsyncIOScheduler(timezone=tz)

    job_defaults = dict(
        args=[db, settings],
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=settings.misfire_grace_seconds,
    )

    scheduler.add_job(
        run_weekly_rewards,
        CronTrigger(day_of_week="sun", hour=23, minute=59, timezone=tz),
        id=WEEKLY_JOB_ID,
        name="Bonus semanal",
        **job_defaults,
    )
    scheduler.add_job(
        run_monthly_rewards,
        CronTrigger(day=1, hour=0, minute=0, timezone=tz),
        id=MONTHLY_JOB_ID,
        name="Bonus mensual",
        **job_defaults,
    )

    return scheduler
