from typing import List, Optional, Type

from beanie import init_beanie, Document
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from clouddrive.configs.settings import settings
from clouddrive.utils.logging import get_logger

logger = get_logger(__name__)

# Bound every metadata call so a stalled server surfaces as a backend error
CLIENT_OPTIONS = {
    "serverSelectionTimeoutMS": 8000,
    "connectTimeoutMS": 8000,
    "socketTimeoutMS": 10000,
    "maxPoolSize": 50,
    "minPoolSize": 0,
    "tz_aware": False,
}


class MongoDB:
    """Owns the Motor client and registers the Beanie documents on it"""

    def __init__(self, url: Optional[str] = None, database_name: Optional[str] = None):
        self.url = url or settings.MONGO_URL
        self.database_name = database_name or settings.MONGO_DB
        self.client: Optional[AsyncIOMotorClient] = None
        self.database = None

    async def connect(self, document_models: List[Type[Document]]) -> None:
        client = AsyncIOMotorClient(self.url, **CLIENT_OPTIONS)
        try:
            await client.admin.command("ping")
        except ServerSelectionTimeoutError as e:
            client.close()
            logger.error(f"MongoDB unreachable at {settings.MONGO_HOST or 'localhost'}:{settings.MONGO_PORT}: {e}")
            raise ConnectionError("Cannot connect to MongoDB server") from e

        self.client = client
        self.database = client[self.database_name]
        await init_beanie(database=self.database, document_models=document_models)
        logger.info(f"Beanie initialized on '{self.database_name}' with {len(document_models)} document models")

    async def ping(self) -> bool:
        if self.client is None:
            return False
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {str(e)}")
            return False
        return True

    async def disconnect(self) -> None:
        if self.client is None:
            return
        self.client.close()
        self.client = None
        self.database = None
        logger.info("Disconnected from MongoDB")


mongodb = MongoDB()
