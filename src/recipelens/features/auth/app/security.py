"""
Password hashing (bcrypt) and stateless access tokens (PyJWT, HMAC).
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import bcrypt
import jwt

from recipelens.shared.errors import Unauthorized


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # stored hash is not a bcrypt hash
        return False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    def __init__(
        self,
        secret: str,
        lifetime: timedelta,
        *,
        algorithm: str = "HS256",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.secret = secret
        self.lifetime = lifetime
        self.algorithm = algorithm
        self._now = now or _utcnow

    def issue(self, user_id: str) -> str:
        issued_at = self._now()
        claims = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def subject(self, token: str) -> str:
        """Verify signature and expiry and return the user id the token was issued for."""
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise Unauthorized("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise Unauthorized("Invalid token") from e
        sub = claims.get("sub")
        if not isinstance(sub, str) or not sub:
            raise Unauthorized("Invalid token")
        return sub
