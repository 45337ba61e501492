# taskapi/routes/auth.py
"""Login endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from taskapi.dependencies import get_token_service, get_user_directory
from taskapi.errors import AUTHENTICATION_FAILED, ApiError, internal_errors
from taskapi.models import LoginRequest
from taskapi.tokens import TokenService
from taskapi.users import UserDirectory
from taskapi.validation import validate_login

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login")
def login(
    body: Optional[LoginRequest] = None,
    users: UserDirectory = Depends(get_user_directory),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """Exchange a username and password for a bearer token."""
    body = body or LoginRequest()
    validate_login(body)

    with internal_errors("An error occurred during login"):
        user = users.find_user(body.username)
        # Same response for unknown user and wrong password.
        if user is None or not users.verify_password(user, body.password):
            logger.info("Failed login for %r", body.username)
            raise ApiError(401, AUTHENTICATION_FAILED, "Invalid username or password")

        token = tokens.issue(user)
        logger.info("User %s logged in", user.id)
        return {
            "success": True,
            "message": "Login successful",
            "data": {"token": token, "user": user.public()},
        }
