import logging
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi
from app.core.config import settings

logger = logging.getLogger(__name__)

# Logical collection names shared by the services
USERS_COLLECTION = "users"
COURSES_COLLECTION = "courses"

# Create the client once per process - pymongo pools connections internally
# and is safe to share across concurrent request handlers.
# Constructing the client does not connect; the first operation does.
client = MongoClient(
    settings.MONGO_URI,
    server_api=ServerApi("1", strict=True, deprecation_errors=True),
    serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
)


def get_database() -> Database:
    return client[settings.MONGO_DB_NAME]


def ping_database() -> bool:
    """
    Check that the store is reachable.

    Called once at startup so connectivity shows up in the logs. A failed ping
    is not fatal: handlers fail closed with a 500 when the store is down.
    """
    try:
        client.admin.command("ping")
        logger.info("Connected to MongoDB successfully")
        return True
    except PyMongoError as e:
        logger.error(f"MongoDB connection failed: {str(e)}")
        return False


def close_database() -> None:
    client.close()


def get_db():
    """
    Dependency for getting the database handle.

    Services take the handle as an explicit argument instead of reaching for
    module-level collections, so tests can override this dependency with an
    in-memory store.
    """
    yield get_database()
