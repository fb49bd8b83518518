from .base import Base, SessionLocal, engine, get_db
from .ids import parse_uuid

__all__ = ["Base", "SessionLocal", "engine", "get_db", "parse_uuid"]
