from .mongo import MongoEngine, open_mongo
from .repository import MongoRepository, to_json_document

__all__ = [
    "MongoEngine",
    "MongoRepository",
    "open_mongo",
    "to_json_document",
]
