"""Salted one-way password hashing (passlib)."""
from passlib.context import CryptContext


class PasswordHasher:
    """pbkdf2_sha256 hashing with a configurable cost (rounds).

    pbkdf2_sha256 is pure Python in passlib, so no native bcrypt build is needed.
    """

    def __init__(self, rounds: int = 29000) -> None:
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash; malformed hashes never match."""
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            return False

    def dummy_verify(self) -> None:
        """Spend the same time as a real verify (used when the account doesn't exist)."""
        self._context.dummy_verify()
