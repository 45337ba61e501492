# taskapi/dependencies.py
"""FastAPI dependencies: app-scoped collaborators and the bearer-token guard."""

import logging
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskapi.errors import FORBIDDEN, UNAUTHORIZED, ApiError
from taskapi.models import CurrentUser
from taskapi.store import TaskStore
from taskapi.tokens import TokenService
from taskapi.users import UserDirectory

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.task_store


def get_user_directory(request: Request) -> UserDirectory:
    return request.app.state.user_directory


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> CurrentUser:
    """Resolve the caller from ``Authorization: Bearer <token>``.

    Missing token is 401 ``UNAUTHORIZED``; a token that fails verification
    is 403 ``FORBIDDEN``.
    """
    if credentials is None or not credentials.credentials:
        raise ApiError(401, UNAUTHORIZED, "Access token is required")
    try:
        return tokens.verify(credentials.credentials)
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise ApiError(403, FORBIDDEN, "Invalid or expired token")
