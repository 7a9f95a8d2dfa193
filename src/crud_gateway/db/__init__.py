from .nosql import MongoEngine, MongoRepository, open_mongo
from .settings import MongoSettings, get_mongo_settings

__all__ = [
    "MongoEngine",
    "MongoRepository",
    "MongoSettings",
    "get_mongo_settings",
    "open_mongo",
]
