from __future__ import annotations

from fastapi import APIRouter, Depends, status

from recipelens.features.auth.app.use_cases import AuthService
from recipelens.features.auth.domain.models import User
from .deps import current_user, get_auth_service
from .schemas import AuthOut, LoginPayload, RegisterPayload, UserOut

router = APIRouter(prefix="/auth", tags=["auth"])
me_router = APIRouter(tags=["users"])


@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterPayload, auth: AuthService = Depends(get_auth_service)):
    result = auth.register(payload.email, payload.password, payload.name)
    return result.model_dump()


@router.post("/login", response_model=AuthOut)
def login(payload: LoginPayload, auth: AuthService = Depends(get_auth_service)):
    result = auth.login(payload.email, payload.password)
    return result.model_dump()


@me_router.get("/me", response_model=UserOut)
def get_me(user: User = Depends(current_user), auth: AuthService = Depends(get_auth_service)):
    return auth.get_user(user.id).model_dump()


@me_router.delete("/me")
def delete_me(user: User = Depends(current_user), auth: AuthService = Depends(get_auth_service)):
    auth.delete_user(user.id)
    return {"message": "User deleted successfully"}
