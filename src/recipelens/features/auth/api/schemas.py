from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class RegisterPayload(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _email_has_at(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("invalid email address")
        return v

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name is required")
        return v


class LoginPayload(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class AuthOut(BaseModel):
    token: str
    user: UserOut
