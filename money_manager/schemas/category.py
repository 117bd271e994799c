# money_manager/schemas/category.py
from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator
import uuid

from money_manager.models.category import CategoryType
from money_manager.schemas.base import APIModel

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

class CategoryBase(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: CategoryType = CategoryType.both
    icon: str = Field("📁", max_length=16)
    color: str = Field("#6366f1", pattern=COLOR_PATTERN)

    @field_validator("name", "icon", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[CategoryType] = None
    icon: Optional[str] = Field(None, max_length=16)
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)

    @field_validator("name", "icon", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

class CategoryRead(CategoryBase):
    id: uuid.UUID
    user_id: uuid.UUID
    is_default: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
