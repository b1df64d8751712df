from collections.abc import Callable

from lireddit.core.modules.auth.models import FieldError, UsernamePasswordInput
from lireddit.core.modules.user.passwords import MAX_PASSWORD_BYTES

MIN_LENGTH = 3

# Registration policy: returns the rejected fields, or None when the input is acceptable
RegisterValidator = Callable[[UsernamePasswordInput], list[FieldError] | None]


def validate_register(options: UsernamePasswordInput) -> list[FieldError] | None:
    """Default registration rules. Checks run in order and the first failure is reported.

    Rules:
    - email must contain "@"
    - username must be at least 3 characters and must not contain "@"
    - password must be at least 3 characters and at most 72 bytes in UTF-8
    """
    if "@" not in options.email:
        return [FieldError(field="email", message="invalid email")]

    if len(options.username) < MIN_LENGTH:
        return [FieldError(field="username", message="length must be greater than 2")]

    if "@" in options.username:
        return [FieldError(field="username", message="cannot include an @")]

    return validate_new_password(options.password, field="password")


def validate_new_password(password: str, field: str = "newPassword") -> list[FieldError] | None:
    if len(password) < MIN_LENGTH:
        return [FieldError(field=field, message="length must be greater than 2")]
    return validate_password_size(password, field)


def validate_password_size(password: str, field: str) -> list[FieldError] | None:
    """Reject passwords the hasher cannot take. Applies under any registration policy."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return [FieldError(field=field, message=f"cannot be longer than {MAX_PASSWORD_BYTES} bytes")]
    return None
