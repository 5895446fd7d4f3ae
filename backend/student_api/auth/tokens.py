"""
Student API — Bearer Token Issuing and Verification
====================================================

What:  Signs and verifies time-limited JWTs carrying the user id.
How:   PyJWT with an HMAC algorithm (HS256 by default). Every token carries
       `sub`, `iat` and `exp`; verification requires all three.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt

from student_api.exceptions import InvalidToken

DEFAULT_TTL = timedelta(hours=1)


class TokenService:
    """
    Issues and verifies signed bearer tokens.

    Attributes:
        secret:     HMAC signing key (JWT_SECRET)
        algorithm:  JWT algorithm name
        ttl:        Lifetime applied when issue() is called without one
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = DEFAULT_TTL):
        if not secret:
            raise ValueError("jwt_secret_blank")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(
        self,
        claims: Mapping[str, Any],
        ttl: Optional[timedelta] = None,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """
        Produces a signed token embedding `claims`.

        Args:
            claims:     Payload fields; `sub` should hold the user id
            ttl:        Lifetime, defaults to self.ttl (one hour)
            issued_at:  Override for the issuance instant (UTC)
        """
        now = issued_at or datetime.now(timezone.utc)
        payload: Dict[str, Any] = dict(claims)
        payload["iat"] = now
        payload["exp"] = now + (ttl or self.ttl)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Returns the decoded claims.

        Raises:
            InvalidToken: signature mismatch, malformed token, or expired.
        """
        if not token:
            raise InvalidToken()
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidToken(context={"reason": "expired"}) from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken(context={"reason": type(e).__name__}) from e
