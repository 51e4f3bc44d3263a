"""Credential store: persistence of user accounts."""
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from bullion_gateway.db.models import User
from bullion_gateway.exceptions import CredentialStoreError, DuplicateEmailError

logger = logging.getLogger(__name__)


class UserRepository:
    """Users keyed by integer id, with a unique email."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("User store %s failed: %s", operation, type(exc).__name__)
            raise CredentialStoreError() from exc

    def get(self, user_id: int) -> User | None:
        with self._store_errors("lookup"):
            return self._session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        with self._store_errors("lookup"):
            return self._session.exec(select(User).where(User.email == email)).first()

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def add(self, user: User) -> User:
        """Insert and commit a new user; a unique-email violation becomes DuplicateEmailError."""
        try:
            self._session.add(user)
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateEmailError() from exc
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("User store insert failed: %s", type(exc).__name__)
            raise CredentialStoreError() from exc
        self._session.refresh(user)
        return user
