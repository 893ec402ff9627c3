from .mongodb import MongoConnection

__all__ = ["MongoConnection"]
