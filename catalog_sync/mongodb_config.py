"""
MongoDB Connection Module
Owns the synchronous pymongo client used by the sync job
"""

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "test"


class MongoDBConfig:
    """MongoDB connection manager for a single sync run."""

    def __init__(self, mongodb_url: str, database_name: Optional[str] = None, client_factory=MongoClient):
        self.mongodb_url = mongodb_url
        self.database_name = database_name
        self.client_factory = client_factory
        self.client: Optional[MongoClient] = None
        self.database: Optional[Database] = None
        self.is_atlas = 'mongodb+srv://' in mongodb_url

    def connect(self) -> Database:
        """Connect to MongoDB, verify the connection with a ping, and return the database."""
        try:
            if self.client is None:
                self.client = self.client_factory(self.mongodb_url)

                # Test connection
                self.client.admin.command('ping')
                if self.database_name:
                    self.database = self.client[self.database_name]
                else:
                    # Database named in the URI path, else the driver default
                    self.database = self.client.get_default_database(DEFAULT_DATABASE)
                logger.info(
                    f"MongoDB connection successful ({'Atlas' if self.is_atlas else 'standalone'}, "
                    f"database={self.database.name})"
                )

            return self.database

        except Exception as e:
            logger.error(f"MongoDB connection failed: {e}")
            if self.client is not None:
                self.client.close()
            self.client = None
            self.database = None
            raise

    def disconnect(self):
        """Disconnect from MongoDB."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("MongoDB connection closed")
