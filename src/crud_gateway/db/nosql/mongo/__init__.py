from .engine import MongoEngine, open_mongo, probe

__all__ = ["MongoEngine", "open_mongo", "probe"]
