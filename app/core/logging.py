"""
Configuración de logging del proceso
"""

import logging

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configura el root logger una sola vez (nivel según settings)"""
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # APScheduler es muy verboso en INFO (una línea por ejecución)
    logging.getLogger("apscheduler").setLevel(max(level, logging.WARNING))
