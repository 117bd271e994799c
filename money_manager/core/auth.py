# money_manager/core/auth.py

import uuid
import logging
from typing import Optional, Union

from fastapi import Depends, Request
from fastapi_users import FastAPIUsers, BaseUserManager, UUIDIDMixin, InvalidPasswordException
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users import schemas
from pydantic import Field

from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_async_session
from .config import settings
from money_manager.models.user import User
from money_manager.models.category import Category  # noqa: F401  (registers the mapper)
from money_manager.models.transaction import Transaction  # noqa: F401
from money_manager.crud.category import seed_default_categories_for_user

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
JWT_AUDIENCE = ["fastapi-users:auth"]

# 1. Pydantic schema
class UserCreate(schemas.BaseUserCreate):
    name: str = Field(..., min_length=1, max_length=100)

# 2. User Manager
class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = settings.SECRET_KEY
    verification_token_secret = settings.SECRET_KEY

    async def validate_password(self, password: str, user: Union[UserCreate, User]) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordException(
                reason=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.email} has registered. Seeding default categories…")
        created = await seed_default_categories_for_user(user.id, self.user_db.session)
        logger.info(f"✅ Created {len(created)} default categories for {user.email}")

# 3. User Database
async def get_user_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyUserDatabase(session, User)

# 4. User Manager dependency
async def get_user_manager(user_db: SQLAlchemyUserDatabase = Depends(get_user_db)):
    yield UserManager(user_db)

# 5. Authentication
bearer_transport = BearerTransport(tokenUrl="/api/v1/auth/jwt/login")

def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=settings.SECRET_KEY,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        token_audience=JWT_AUDIENCE,
        algorithm=settings.ALGORITHM,
    )

auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

# 6. FastAPI Users instance
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend])

# Export for other modules
__all__ = [
    "fastapi_users",
    "auth_backend",
    "get_jwt_strategy",
    "get_user_manager",
    "User",
    "UserCreate",
    "UserManager",
]
