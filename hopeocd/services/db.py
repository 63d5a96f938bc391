# async mongodb client for the hosted backend
# uses motor for non-blocking operations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from hopeocd.config import settings

logger = logging.getLogger(__name__)

ROW_COLLECTIONS = (
    "mood_entries",
    "thought_records",
    "erp_sessions",
    "meditation_sessions",
    "sleep_sessions",
    "crisis_logs",
    "education_progress",
    "ai_sessions",
)


class Database:
    """async mongodb connection manager"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """establish connection to mongodb"""
        if self.client is not None:
            return

        logger.info(f"Connecting to MongoDB database: {settings.MONGODB_DATABASE}")
        self.client = AsyncIOMotorClient(settings.MONGODB_URI)
        self.db = self.client[settings.MONGODB_DATABASE]

        # verify connection
        await self.ping()
        await self.ensure_indexes()
        logger.info("MongoDB connection established")

    async def ensure_indexes(self):
        """unique row ids, so replaying an offline write can never insert it twice"""
        for name in ROW_COLLECTIONS:
            await self.db[name].create_index("id", unique=True)
        await self.db["user_preferences"].create_index("user_id", unique=True)

    async def ping(self):
        """round-trip to the server, raises when it is unreachable"""
        await self.client.admin.command("ping")

    async def close(self):
        """close mongodb connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB connection closed")

    # collection accessors

    @property
    def mood_entries(self):
        return self.db["mood_entries"]

    @property
    def thought_records(self):
        return self.db["thought_records"]

    @property
    def erp_sessions(self):
        return self.db["erp_sessions"]

    @property
    def meditation_sessions(self):
        return self.db["meditation_sessions"]

    @property
    def sleep_sessions(self):
        return self.db["sleep_sessions"]

    @property
    def crisis_logs(self):
        return self.db["crisis_logs"]

    @property
    def education_progress(self):
        return self.db["education_progress"]

    @property
    def ai_sessions(self):
        return self.db["ai_sessions"]

    @property
    def user_preferences(self):
        return self.db["user_preferences"]


# singleton instance
db = Database()


async def get_db() -> Database:
    """dependency injection for database access"""
    return db
