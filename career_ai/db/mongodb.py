"""
MongoDB Connection Utility

MongoDB stores:
- User accounts (credential store)
- Questionnaire submissions and their AI analysis

WHY MongoDB for these?
- Schema-flexible: questionnaire answers are an open key/value mapping
- Document-oriented: each submission is self-contained
- No joins needed
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from career_ai.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongo_uri, serverSelectionTimeoutMS=settings.mongo_timeout_ms)
    return _client


def get_mongo_db() -> Database:
    """Get the application database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongo_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - users: registered accounts
    - assessments: questionnaire answers + AI analysis
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "assessments": "assessments"
}


def init_mongo_indexes():
    """
    Create indexes.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Email uniqueness is enforced by the database, not just by the signup check
    db[COLLECTIONS["users"]].create_index([("email", ASCENDING)], unique=True)

    db[COLLECTIONS["assessments"]].create_index([("userId", ASCENDING), ("createdAt", -1)])

    logger.info("MongoDB indexes created successfully")
