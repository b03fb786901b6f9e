from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from recipelens.shared.errors import AlreadyExists, InvalidCredentials, NotFound, Unauthorized
from recipelens.shared.utils.id_utils import new_id
from recipelens.features.auth.app.security import TokenIssuer, hash_password, verify_password
from recipelens.features.auth.domain.models import AuthResult, User
from recipelens.features.auth.infra.user_repository import UserRepository


class RecipeCleanup(Protocol):
    def delete_all_for_user(self, user_id: str) -> int: ...


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        tokens: TokenIssuer,
        *,
        recipes: Optional[RecipeCleanup] = None,
        now: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.users = users
        self.tokens = tokens
        self.recipes = recipes
        self._now = now or (lambda: datetime.now(timezone.utc))
        self.log = logger or logging.getLogger("recipelens.auth")

    def register(self, email: str, password: str, name: str) -> AuthResult:
        email = normalize_email(email)
        self.log.info("User registration attempt | email=%s", email)
        if self.users.get_by_email(email) is not None:
            self.log.warning("User registration failed: user already exists | email=%s", email)
            raise AlreadyExists("User already exists")

        now = self._now()
        user = User(
            id=new_id(),
            email=email,
            password_hash=hash_password(password),
            name=name.strip(),
            created_at=now,
            updated_at=now,
        )
        self.users.create(user)
        token = self.tokens.issue(user.id)
        self.log.info("User registered | user_id=%s", user.id)
        return AuthResult(token=token, user=user.sanitized())

    def login(self, email: str, password: str) -> AuthResult:
        email = normalize_email(email)
        self.log.info("User login attempt | email=%s", email)
        user = self.users.get_by_email(email)
        if user is None:
            self.log.warning("Login failed: user not found | email=%s", email)
            raise NotFound("User not found")
        if not verify_password(password, user.password_hash):
            self.log.warning("Login failed: invalid password | email=%s", email)
            raise InvalidCredentials("Invalid credentials")
        return AuthResult(token=self.tokens.issue(user.id), user=user.sanitized())

    def user_from_token(self, token: str) -> User:
        user_id = self.tokens.subject(token)
        user = self.users.get_by_id(user_id)
        if user is None:
            self.log.warning("Token subject no longer exists | user_id=%s", user_id)
            raise Unauthorized("Invalid or expired token")
        return user.sanitized()

    def get_user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user.sanitized()

    def delete_user(self, user_id: str) -> None:
        if not self.users.delete(user_id):
            raise NotFound("User not found")
        removed = self.recipes.delete_all_for_user(user_id) if self.recipes is not None else 0
        self.log.info("User deleted | user_id=%s | recipes_removed=%d", user_id, removed)
