# money_manager/schemas/user.py
from pydantic import EmailStr, Field, field_validator
import uuid

from money_manager.schemas.base import APIModel

class RegisterRequest(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

# Public fields returned with a token and on GET /auth/me
class UserPublic(APIModel):
    id: uuid.UUID
    name: str
    email: EmailStr

class AuthResponse(APIModel):
    token: str
    user: UserPublic
