"""Database models and connection setup."""

from typing import Dict, List, Optional

from bson import ObjectId
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, IndexModel

from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)


# Indexes declared per collection; anything else (besides _id_) is dropped on sync
USER_INDEXES: List[IndexModel] = []
EXERCISE_INDEXES: List[IndexModel] = [
    IndexModel([("userId", ASCENDING), ("date", ASCENDING)], name="userId_1_date_1"),
]


class Database:
    """Database connection manager."""

    def __init__(self, client, name: str):
        self.client = client
        self.name = name

    @property
    def database(self):
        return self.client[self.name]

    @property
    def users(self):
        """Users collection."""
        return self.database.users

    @property
    def exercises(self):
        """Exercises collection."""
        return self.database.exercises

    def close(self):
        self.client.close()


def connect_to_mongo(mongo_uri: Optional[str] = None) -> Database:
    """Create database connection.

    Motor connects lazily, so this never blocks on an unreachable server;
    the first query surfaces the failure instead.
    """
    client = AsyncIOMotorClient(mongo_uri or settings.mongo_uri)
    name = client.get_default_database(default=settings.mongo_db_name).name
    logger.info(f"Connected to MongoDB database: {name}")
    return Database(client, name)


def close_mongo_connection(database: Optional[Database]):
    """Close database connection."""
    if database:
        database.close()
        logger.info("Disconnected from MongoDB")


async def sync_indexes(collection, declared: List[IndexModel]) -> List[str]:
    """Make the collection's indexes match the declared ones.

    Creates every declared index and drops indexes that are no longer
    declared. Returns the names of the dropped indexes.
    """
    declared_names = {index.document["name"] for index in declared}
    existing = await collection.index_information()

    dropped = []
    for name in existing:
        if name == "_id_" or name in declared_names:
            continue
        await collection.drop_index(name)
        dropped.append(name)

    for index in declared:
        document = index.document
        await collection.create_index(list(document["key"].items()), name=document["name"])

    return dropped


async def sync_all_indexes(database: Database) -> Dict[str, List[str]]:
    """Synchronize indexes on both collections."""
    dropped = {
        "users": await sync_indexes(database.users, USER_INDEXES),
        "exercises": await sync_indexes(database.exercises, EXERCISE_INDEXES),
    }
    logger.info(f"Indexes synchronized, dropped: {dropped}")
    return dropped


async def init_mongo() -> Database:
    """Initialize MongoDB connection and declared collection indexes."""
    database = connect_to_mongo()

    try:
        await sync_all_indexes(database)
    except Exception as e:
        # Keep serving; each request reports storage failures on its own
        logger.error(f"Index initialization failed: {e}", exc_info=True)

    return database


def find_user_filter(user_id: str) -> Dict[str, ObjectId]:
    """Build the lookup filter for a user id.

    Raises bson.errors.InvalidId when the id is not an ObjectId.
    """
    return {"_id": ObjectId(user_id)}


# Request dependencies resolving collections from the app-scoped connection
def get_database(request: Request) -> Database:
    """Get database instance."""
    return request.app.state.database


def get_users_collection(request: Request):
    """Get users collection."""
    return get_database(request).users


def get_exercises_collection(request: Request):
    """Get exercises collection."""
    return get_database(request).exercises
