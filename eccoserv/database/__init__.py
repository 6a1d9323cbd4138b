from .session import Base, engine, AsyncSessionLocal, get_db, init_db

__all__ = [
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_db",
    "init_db"
]
