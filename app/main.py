"""
Entry point del servicio de recompensas de ligas

Arranca la conexión a MongoDB y el scheduler con los repartos
semanal y mensual. Solo expone endpoints de estado.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.database import Database
from app.services.schedule_service import build_scheduler

from app.controllers.health_controller import router as health_router

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect(settings)

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = build_scheduler(Database.get_db(), settings)
        scheduler.start()
        logger.info(f"⏰ Scheduler started ({settings.rewards_timezone})")
    app.state.scheduler = scheduler

    yield

    if scheduler is not None:
        scheduler.shutdown(wait=False)
        app.state.scheduler = None
    await Database.disconnect()

# Creo la app
app = FastAPI(
    title="League Rewards",
    description="Reparto periódico de bonus al líder de cada liga",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(health_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que el servicio está levantado
    return {
        "name": "League Rewards",
        "version": "1.0.0",
        "docs": "/docs"
    }
