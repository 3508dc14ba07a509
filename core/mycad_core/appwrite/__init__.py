from .client import AppwriteClient
from .databases import Databases, DocumentList
from .env import AppwriteConfig
from .ids import unique_id
from .query import Query
from .storage import FileList, Storage
from .users import Users

__all__ = [
    "AppwriteClient",
    "AppwriteConfig",
    "Databases",
    "DocumentList",
    "FileList",
    "Query",
    "Storage",
    "Users",
    "unique_id",
]
