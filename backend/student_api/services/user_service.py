"""
Student API — User Service (Registration and Login)
====================================================

What:  Creates users and exchanges credentials for bearer tokens.
Who:   Called by the /auth route handlers.

Registration:
    1. email and password present, else ValidationError (400)
    2. find user by email; found → AlreadyExistsError (400)
    3. hash password, insert {email, passwordHash, createdAt}

    Steps 2 and 3 are separate round trips with no unique index behind
    them, so two concurrent registrations for one email can both succeed.

Login:
    1. email and password present, else ValidationError (400)
    2. find user by email; verify password
    3. either check failing → UnauthenticatedError("Invalid credentials")
    4. issue a token with sub = user id
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from pymongo.errors import PyMongoError

from student_api.auth.passwords import PasswordHasher
from student_api.auth.tokens import TokenService
from student_api.database import DocumentStore
from student_api.exceptions import (
    AlreadyExistsError,
    InternalError,
    UnauthenticatedError,
    ValidationError,
)
from student_api.schemas.auth import Credentials

logger = logging.getLogger(__name__)


def _require_credentials(credentials: Optional[Credentials]) -> Tuple[str, str]:
    if credentials is None or not credentials.email or not credentials.password:
        raise ValidationError()
    return credentials.email, credentials.password


class UserService:
    """Stateless; hasher, token service and store are passed per call."""

    async def register(
        self,
        store: DocumentStore,
        hasher: PasswordHasher,
        credentials: Optional[Credentials],
    ) -> str:
        """
        Creates a user and returns its hex id.

        Raises:
            ValidationError:    email or password missing
            AlreadyExistsError: a user with this email exists
            InternalError:      a database round trip failed
        """
        email, password = _require_credentials(credentials)

        try:
            existing = await store.users.find_one({"email": email})
        except PyMongoError as e:
            logger.error("User lookup failed during registration: %s", e, exc_info=True)
            raise InternalError(detail=str(e))
        if existing is not None:
            logger.warning("Registration rejected: email already registered")
            raise AlreadyExistsError()

        password_hash = await hasher.hash(password)
        try:
            user_id = await store.users.insert_one(
                {
                    "email": email,
                    "passwordHash": password_hash,
                    "createdAt": datetime.now(timezone.utc),
                }
            )
        except PyMongoError as e:
            logger.error("User insert failed: %s", e, exc_info=True)
            raise InternalError(detail=str(e))

        logger.info("Registered user %s", user_id)
        return str(user_id)

    async def login(
        self,
        store: DocumentStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        credentials: Optional[Credentials],
    ) -> str:
        """
        Returns a signed bearer token for valid credentials.

        Raises:
            ValidationError:      email or password missing
            UnauthenticatedError: unknown email or wrong password (same message)
            InternalError:        the user lookup failed
        """
        email, password = _require_credentials(credentials)

        try:
            user = await store.users.find_one({"email": email})
        except PyMongoError as e:
            logger.error("User lookup failed during login: %s", e, exc_info=True)
            raise InternalError(detail=str(e))

        if user is None or not await hasher.verify(password, user.get("passwordHash", "")):
            logger.warning("Login failed: invalid credentials")
            raise UnauthenticatedError(message="Invalid credentials")

        user_id = str(user["_id"])
        logger.info("User %s logged in", user_id)
        return tokens.issue({"sub": user_id, "email": email})


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
