import os
from pymongo import MongoClient
import logging

logger = logging.getLogger(__name__)

DEFAULT_MONGO_URI = "mongodb://localhost:27017/"
DEFAULT_MONGO_DB = "carebook"


def get_db_client(mongo_uri=None, ping=True, **options):
    """Get MongoDB client, optionally checking the server answers"""
    mongo_uri = mongo_uri or os.environ.get('MONGO_URI', DEFAULT_MONGO_URI)

    client_options = {
        "serverSelectionTimeoutMS": 5000,
        "connectTimeoutMS": 5000,
        "socketTimeoutMS": 10000,
        "maxPoolSize": 50,
    }
    client_options.update(options)

    try:
        client = MongoClient(mongo_uri, **client_options)
        if ping:
            client.admin.command('ping')
            logger.info("Connected to MongoDB successfully")
        return client
    except Exception as e:
        logger.error(f"MongoDB connection error: {str(e)}")
        raise


def get_database(client, db_name=None):
    """Get the application database from a client"""
    return client[db_name or os.environ.get('MONGO_DB', DEFAULT_MONGO_DB)]
