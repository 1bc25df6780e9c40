from . import models
from .session import get_engine, get_session, get_sessionmaker, init_db

__all__ = [
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_db",
    "models",
]
