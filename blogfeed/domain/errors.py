"""Errors raised by the auth and content services."""

from contextlib import contextmanager
from typing import Iterator


class BlogError(Exception):
    """Base class for every error surfaced to the user."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(BlogError):
    """Base class for authentication-related exceptions."""


class DuplicateUserError(AuthError):
    default_message = "User already exists"


class InvalidCredentialsError(AuthError):
    default_message = "Invalid email or password"


class NotAuthenticatedError(AuthError):
    default_message = "You must be logged in"


class OperationFailedError(BlogError):
    """Unexpected failure (usually the store) while saving a change."""

    default_message = "Operation failed"


@contextmanager
def wrap_failures(message: str, tag: str = "feed") -> Iterator[None]:
    """Turn unexpected exceptions into OperationFailedError; BlogErrors pass through."""
    try:
        yield
    except BlogError:
        raise
    except Exception as exc:
        print(f"[{tag}] {message}: {exc}")
        raise OperationFailedError(message) from exc
