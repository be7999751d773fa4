from pymongo import MongoClient, ASCENDING
from pymongo.errors import PyMongoError
import re
import logging

from .config import MONGODB_URI, MONGODB_DEFAULT_DB, MONGODB_TIMEOUT_MS
from .errors import ConnectionFailure, PersistenceError

logger = logging.getLogger(__name__)


def mask_uri(uri: str) -> str:
    """Hide credentials embedded in a connection string"""
    return re.sub(r"//[^:/@]+:[^@]+@", "//***:***@", uri)


class Database:
    def __init__(self, client=None, uri: str = MONGODB_URI, name: str = None):
        self.MONGODB_URI = uri
        # MongoClient connects lazily; nothing touches the network until the first operation
        self.client = client or MongoClient(uri, serverSelectionTimeoutMS=MONGODB_TIMEOUT_MS)
        if name:
            self.db = self.client[name]
        else:
            # database named in the URI path, if any
            self.db = self.client.get_default_database(MONGODB_DEFAULT_DB)

        self.energy_samples = self.db.energysamples
        self.rooms = self.db.rooms
        self.user_profiles = self.db.userprofiles

    def ping(self):
        """Verify the server is reachable, failing fast after the selection timeout"""
        try:
            self.client.admin.command("ping")
        except PyMongoError as e:
            raise ConnectionFailure(str(e)) from e
        logger.info("✅ MongoDB connected successfully")
        logger.info(f"📊 Database: {self.db.name}")

    def ensure_indexes(self):
        """Create the indexes the queries and upserts rely on"""
        try:
            self.energy_samples.create_index([("deviceId", ASCENDING)])
            self.energy_samples.create_index([("timestamp", ASCENDING)])
            self.rooms.create_index([("id", ASCENDING)], unique=True)
            self.user_profiles.create_index([("userId", ASCENDING)], unique=True)
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        logger.info("✅ Indexes ensured")

    def close(self):
        self.client.close()


# Global database instance
db = Database()


def get_db() -> Database:
    """Dependency returning the process-wide database"""
    return db
