"""
🔌 Database Connection Setup - MongoDB

Configuración centralizada para conectar a MongoDB
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """Conexión a MongoDB compartida por la API y el scheduler"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls, settings: Settings):
        """Conecta a MongoDB"""
        if cls.client is None:
            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
                tz_aware=True,  # Las fechas vuelven como UTC aware
            )
            cls.db = cls.client[settings.mongodb_db_name]

            # Test de conexión
            await cls.client.admin.command("ping")
            logger.info(f"✅ Connected to MongoDB: {settings.mongodb_db_name}")

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🏗️ CREAR ÍNDICES (run once al deployment)
# ============================================

async def create_indexes(db: AsyncIOMotorDatabase):
    """
    Crea los índices que necesita el reparto de premios

    - (league_id, date): consulta de actividades de la ventana
    - (league_id, is_bonus, window_start, points_breakdown): comprobación
      de bonus ya repartido antes de escribir
    """
    await db.activities.create_index([("league_id", 1), ("date", 1)])
    await db.activities.create_index(
        [
            ("league_id", 1),
            ("is_bonus", 1),
            ("window_start", 1),
            ("points_breakdown", 1),
        ]
    )

    logger.info("✅ Indexes created successfully")
