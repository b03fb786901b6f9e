from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    id: str
    email: str
    password_hash: str = ""
    name: str
    created_at: datetime
    updated_at: datetime

    def sanitized(self) -> "User":
        """Copy safe to hand back to a caller: the password hash is blanked."""
        return self.model_copy(update={"password_hash": ""})


class AuthResult(BaseModel):
    token: str
    user: User
