"""
Database package for the video sharing backend.

Provides SQLAlchemy models, session management, and database utilities.
"""

from db.base import Base
from db.session import get_db, engine, SessionLocal

__all__ = ["Base", "get_db", "engine", "SessionLocal"]
