"""Request/response bodies for the auth and user routes."""
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import ConfigDict, Field, StringConstraints, field_validator

from bullion_gateway.schemas.base import CamelModel

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255

PersonName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
]


class RegisterRequest(CamelModel):
    first_name: PersonName
    last_name: PersonName
    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    # Minimum length is a runtime setting, enforced by AuthService.
    password: str = Field(min_length=1, repr=False)

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        """Reject malformed addresses; the address is stored exactly as given."""
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        return value


class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=EMAIL_MAX_LENGTH)
    password: str = Field(min_length=1, repr=False)


class UserResponse(CamelModel):
    """Public user fields. The password hash is never part of a response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str


class AuthResponse(CamelModel):
    token: str
    user: UserResponse
