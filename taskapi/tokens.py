# taskapi/tokens.py
"""Signed, stateless bearer tokens."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError

from taskapi.models import CurrentUser, User

ALGORITHM = "HS256"


class TokenService:
    """Issues and verifies HS256 JWTs carrying ``id``, ``username`` and ``email``."""

    def __init__(self, secret: str, ttl: timedelta = timedelta(hours=24)) -> None:
        self._secret = secret
        self._ttl = ttl

    def issue(self, user: User, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> CurrentUser:
        """Decode *token* and return its identity claims.

        Raises
        ------
        jwt.InvalidTokenError
            On a bad signature, expiry, malformed token or missing claims.
        """
        claims = jwt.decode(
            token,
            self._secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
        try:
            return CurrentUser(
                id=claims["id"], username=claims["username"], email=claims["email"]
            )
        except (KeyError, ValidationError) as exc:
            raise jwt.InvalidTokenError("Token is missing identity claims") from exc
