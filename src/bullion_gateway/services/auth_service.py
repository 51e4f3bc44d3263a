"""Registration, login and current-user lookup."""
import logging

from bullion_gateway.db import User, UserRepository
from bullion_gateway.exceptions import (DuplicateEmailError,
                                        InputValidationError,
                                        InvalidCredentialsError,
                                        UserNotFoundError)
from bullion_gateway.schemas import (AuthResponse, LoginRequest,
                                     RegisterRequest, UserResponse)
from bullion_gateway.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Auth over a user repository, a password hasher and a token service.

    Built per request (the repository holds a request-scoped DB session).
    Passwords and hashes are never logged or returned.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        *,
        password_min_length: int = 10,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._password_min_length = password_min_length

    def register(self, request: RegisterRequest) -> UserResponse:
        """Create a user account.

        Raises:
            InputValidationError: password shorter than the configured minimum.
            DuplicateEmailError: the email is already registered.
        """
        if len(request.password) < self._password_min_length:
            raise InputValidationError(
                f"Password must be at least {self._password_min_length} characters"
            )
        if self._users.exists_by_email(request.email):
            logger.info("Registration rejected: email already in use")
            raise DuplicateEmailError()

        user = User(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password_hash=self._hasher.hash(request.password),
        )
        saved = self._users.add(user)
        logger.info("Registered user id=%s", saved.id)
        return UserResponse.model_validate(saved)

    def login(self, request: LoginRequest) -> AuthResponse:
        """Verify credentials and issue a session token.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        user = self._users.get_by_email(request.email)
        if user is None:
            self._hasher.dummy_verify()
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()
        if not self._hasher.verify(request.password, user.password_hash):
            logger.info("Login failed: wrong password for user id=%s", user.id)
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id)
        logger.info("User id=%s logged in", user.id)
        return AuthResponse(token=token, user=UserResponse.model_validate(user))

    def get_current_user(self, user_id: int) -> UserResponse:
        """Return public fields for the user a token points at."""
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        return UserResponse.model_validate(user)
