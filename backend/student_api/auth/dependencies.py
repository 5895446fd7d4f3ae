"""
Student API — Auth Dependencies
================================

What:  FastAPI dependencies exposing the hasher and token service attached
       by create_app(), and the bearer gate for write routes.
How:   HTTPBearer(auto_error=False) extracts the token; we raise our own
       UnauthenticatedError so the response body matches every other error
       (FastAPI's default would be 403 {"detail": ...}).
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from student_api.auth.passwords import PasswordHasher
from student_api.auth.tokens import TokenService
from student_api.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


async def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """
    Gate for protected routes.

    Behavior:
        - No Authorization header (or not a Bearer scheme) → 401 "No token provided"
        - Token fails verification → 401 "Invalid token"
        - Otherwise the decoded claims are stored on request.state.user and returned

    Usage:
        @router.post("/students", dependencies=[Depends(require_auth)])
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError(message="No token provided")

    # InvalidToken propagates to the central handler as a 401
    claims = tokens.verify(credentials.credentials)
    request.state.user = claims
    logger.debug("Authenticated request for user %s", claims.get("sub"))
    return claims
