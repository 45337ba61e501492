# taskapi/users.py
"""User lookup and password verification."""

import hmac
import logging
from typing import Mapping, Optional, Protocol

import bcrypt

from taskapi.models import User

logger = logging.getLogger(__name__)

DEMO_USERS = (
    User(
        id=1,
        username="admin",
        password_hash="$2a$10$8K1p/a0drt..vBQ2xhcfAO0GWK5WLlxKUyJvFhZn8XA6E4.xb9K8a",
        email="admin@taskmanager.com",
    ),
    User(
        id=2,
        username="testuser",
        password_hash="$2a$10$TKh2H1.PFWmWoSDwg8RHaOd6j2sVPQOjFSYt5YYLjCgq5YQxAV0Ne",
        email="test@taskmanager.com",
    ),
    User(
        id=3,
        username="demo",
        password_hash="$2a$10$Y7mWiT4FHSqnmvgAV0g2vuLgT3HLZjgN4H.jNfDzqY5c2ZxXsJ8Lq",
        email="demo@taskmanager.com",
    ),
)

# Demo-only. Never enable for real accounts.
DEMO_PASSWORDS = {
    "admin": "password123",
    "testuser": "test123",
    "demo": "demo",
}


class UserDirectory(Protocol):
    def find_user(self, username: str) -> Optional[User]: ...

    def verify_password(self, user: User, plaintext: str) -> bool: ...


def check_password_hash(plaintext: str, password_hash: str) -> bool:
    """Return True if *plaintext* matches the bcrypt *password_hash*.

    A malformed hash is treated as a mismatch.
    """
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.debug("Stored password hash is not a valid bcrypt hash")
        return False


class StaticUserDirectory:
    """A fixed, read-only set of accounts keyed by username.

    Parameters
    ----------
    users : iterable of User
        Accounts to serve. Usernames must be unique.
    plaintext_passwords : mapping, optional
        Username to plaintext password. When given, a login that fails the
        bcrypt check is retried against this mapping. Demo use only.
    """

    def __init__(self, users, plaintext_passwords: Optional[Mapping[str, str]] = None) -> None:
        self._users = {user.username: user for user in users}
        self._plaintext = dict(plaintext_passwords or {})

    def find_user(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def verify_password(self, user: User, plaintext: str) -> bool:
        if check_password_hash(plaintext, user.password_hash):
            return True
        expected = self._plaintext.get(user.username)
        if expected is None:
            return False
        return hmac.compare_digest(expected.encode("utf-8"), plaintext.encode("utf-8"))


def demo_user_directory(allow_plaintext: bool = True) -> StaticUserDirectory:
    """The three demo accounts, optionally with the plaintext fallback enabled."""
    return StaticUserDirectory(DEMO_USERS, DEMO_PASSWORDS if allow_plaintext else None)
