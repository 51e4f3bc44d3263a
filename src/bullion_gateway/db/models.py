"""Database models for the gateway.

Only user accounts are persisted. Quotes are cached in process memory
(see services.quote_cache); they are never written to the database.
"""
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """User account for authentication."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str
    email_verified: bool = Field(default=False)
    created_at: datetime = Field(default_factory=_utcnow)
