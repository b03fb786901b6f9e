from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recipelens.shared.errors import Unauthorized
from recipelens.features.auth.app.use_cases import AuthService
from recipelens.features.auth.domain.models import User

_bearer = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve `Authorization: Bearer <token>` to the calling user."""
    if credentials is None:
        if request.headers.get("Authorization"):
            raise Unauthorized("Invalid authorization header format")
        raise Unauthorized("Missing authorization header")
    user = auth.user_from_token(credentials.credentials)
    request.state.user_id = user.id
    return user
