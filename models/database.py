"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    db.client = AsyncIOMotorClient(settings.mongodb_url, tz_aware=True)
    logger.info("Connected to MongoDB database '%s'", database_name())


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo():
    """Initialize MongoDB connection and all collections with indexes."""
    await connect_to_mongo()

    database = get_database()

    # Workout sessions collection
    sessions = database.workout_sessions
    await sessions.create_index([("member_id", ASCENDING), ("date", DESCENDING)])
    await sessions.create_index([("member_id", ASCENDING), ("status", ASCENDING)])

    # Personal records and goals collections
    await database.personal_records.create_index([("member_id", ASCENDING)])
    await database.goals.create_index([("member_id", ASCENDING), ("status", ASCENDING)])

    # Scheduled workouts collection
    scheduled = database.scheduled_workouts
    await scheduled.create_index([("id", ASCENDING)], unique=True)
    await scheduled.create_index([("user_id", ASCENDING), ("scheduled_date", ASCENDING)])
    await scheduled.create_index([("user_id", ASCENDING), ("status", ASCENDING)])

    # Schedule preferences collection
    await database.schedule_preferences.create_index([("user_id", ASCENDING)], unique=True)

    logger.info("MongoDB initialized: All collections created with indexes")


def database_name() -> str:
    return settings.mongodb_url.rsplit("/", 1)[-1].split("?")[0]


def get_database():
    """Get database instance."""
    if db.client is None:
        raise RuntimeError("MongoDB is not connected; call connect_to_mongo() first")
    return db.client[database_name()]


# Helper functions to get collections
def get_workout_sessions_collection():
    """Get workout sessions collection."""
    return get_database().workout_sessions


def get_personal_records_collection():
    """Get personal records collection."""
    return get_database().personal_records


def get_goals_collection():
    """Get goals collection."""
    return get_database().goals


def get_scheduled_workouts_collection():
    """Get scheduled workouts collection."""
    return get_database().scheduled_workouts


def get_schedule_preferences_collection():
    """Get schedule preferences collection."""
    return get_database().schedule_preferences
