# money_manager/crud/user.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from money_manager.models.user import User
from typing import Optional
import uuid

async def get_user_by_id(user_id: uuid.UUID, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

async def get_latest_user(db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).order_by(desc(User.created_at)).limit(1))
    return result.scalar_one_or_none()
