"""Signed session tokens (JWT, HMAC-SHA256).

Tokens are stateless bearer credentials: nothing is stored server-side, so a
token stays valid until its ``exp`` even if it leaks. There is no revocation.
"""
import time
from collections.abc import Callable

from jose import JWTError, jwt

from bullion_gateway.exceptions import InvalidTokenError


class TokenService:
    """Issue and validate tokens whose subject is a user id.

    Pure function of (token, secret, clock): safe to share between concurrent
    requests without locking.
    """

    def __init__(
        self,
        secret: str,
        lifetime_seconds: int,
        *,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._lifetime = int(lifetime_seconds)
        self._algorithm = algorithm
        self._clock = clock

    @property
    def lifetime_seconds(self) -> int:
        return self._lifetime

    def issue(self, user_id: int) -> str:
        """Return a signed token for user_id, expiring after the configured lifetime."""
        issued_at = int(self._clock())
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def validate(self, token: str) -> int:
        """Return the user id carried by a token.

        Raises:
            InvalidTokenError: bad signature, malformed token or claims, or expired.
        """
        try:
            # Expiry is checked below against the injected clock.
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError() from exc

        expires_at = claims.get("exp")
        subject = claims.get("sub")
        if not isinstance(expires_at, int) or not isinstance(subject, str):
            raise InvalidTokenError("Malformed token")
        if self._clock() >= expires_at:
            raise InvalidTokenError("Token expired")
        try:
            return int(subject)
        except ValueError as exc:
            raise InvalidTokenError("Malformed token") from exc
