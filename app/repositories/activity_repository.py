"""
🏃 ActivityRepository - Actividades de los usuarios por liga

Lectura por ventana temporal y escritura (solo append) de bonus.
Las actividades nunca se modifican ni se borran desde aquí.
"""

from datetime import datetime
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.activity import Activity, BonusActivityCreate


class ActivityRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["activities"]

    # ============================================
    # 📌 READ
    # ============================================

    async def get_league_activities_since(
        self,
        league_id: str,
        since: datetime
    ) -> list[Activity]:
        """
        Actividades de una liga con fecha >= since

        Ordenadas por fecha (y _id) para que el orden de agregación
        no dependa del orden físico de la colección
        """
        cursor = self.collection.find({
            "league_id": league_id,
            "date": {"$gte": since}
        }).sort([("date", 1), ("_id", 1)])

        docs = await cursor.to_list(length=None)
        return [Activity(**doc) for doc in docs]

    async def find_bonus(
        self,
        league_id: str,
        window_start: datetime,
        label: str
    ) -> Optional[Activity]:
        """Bonus ya repartido para (liga, ventana, premio), si existe"""
        doc = await self.collection.find_one({
            "league_id": league_id,
            "is_bonus": True,
            "window_start": window_start,
            "points_breakdown": label,
        })
        return Activity(**doc) if doc else None

    # ============================================
    # 📌 CREATE
    # ============================================

    async def add_bonus(self, bonus: BonusActivityCreate) -> Activity:
        """Inserta el registro sintético de bonus y lo devuelve con su _id"""
        doc = bonus.to_document()
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return Activity(**doc)


# ============================================
# 🎯 EJEMPLO DE USO
# ============================================

"""
activity_repo = ActivityRepository(db)

# Actividades de la última semana
activities = await activity_repo.get_league_activities_since(
    "liga-madrid",
    datetime.now(timezone.utc) - timedelta(days=7)
)

# Premiar al ganador
await activity_repo.add_bonus(BonusActivityCreate(
    user_id="user123",
    league_id="liga-madrid",
    date=datetime.now(timezone.utc),
    points_earned=500,
    label="🏆 CAMPEÓN SEMANAL (+500)",
    window_start=window_start,
))
"""
