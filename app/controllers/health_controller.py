"""
Controlador de salud - Endpoint de comprobación del servicio
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from app.database import Database


router = APIRouter(tags=["health"])


class ScheduledJob(BaseModel):
    id: str
    name: str
    next_run_time: Optional[datetime] = None


class HealthResponse(BaseModel):
    """Respuesta del chequeo de estado."""
    status: str
    database: str
    scheduler: str
    jobs: list[ScheduledJob] = []


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Endpoint de verificación de estado.

    Comprueba que la base de datos esté conectada y lista los repartos
    programados con su próxima ejecución.
    """
    db_status = "connected" if Database.db is not None else "disconnected"

    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None or not scheduler.running:
        return HealthResponse(status="ok", database=db_status, scheduler="stopped")

    jobs = [
        ScheduledJob(id=job.id, name=job.name, next_run_time=job.next_run_time)
        for job in scheduler.get_jobs()
    ]
    return HealthResponse(status="ok", database=db_status, scheduler="running", jobs=jobs)
