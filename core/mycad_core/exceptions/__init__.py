from .base import *
from .appwrite import *
from .config import *

__all__ = [
    "MyCADError",
    "ClientError",
    "ServerError",
    "DocumentNotFound",
    "FileNotFound",
    "AppwriteError",
    "MissingConfigError",
]
