"""
LeagueRepository - MongoDB access for leagues collection (read-only).
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.league import League


class LeagueRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["leagues"]

    async def get_all(self) -> list[League]:
        """Get every league."""
        docs = await self.collection.find({}, {"_id": 1, "name": 1}).to_list(length=None)
        return [League(**doc) for doc in docs]
