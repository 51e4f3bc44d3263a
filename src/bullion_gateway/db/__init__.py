"""Database package: models, session management and the user repository."""
from bullion_gateway.db.models import User
from bullion_gateway.db.repository import UserRepository
from bullion_gateway.db.sessions import create_db_engine, get_session, init_db

__all__ = ["User", "UserRepository", "create_db_engine", "get_session", "init_db"]
