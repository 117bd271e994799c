# money_manager/schemas/transaction.py
from typing import List, Optional
from pydantic import Field, field_validator
from datetime import datetime
import uuid

from money_manager.models.transaction import Division, TransactionType
from money_manager.schemas.base import APIModel
from money_manager.utils.periods import as_local

MIN_AMOUNT = 0.01

class TransactionBase(APIModel):
    type: TransactionType
    amount: float = Field(..., ge=MIN_AMOUNT, allow_inf_nan=False, description="Must be greater than 0")
    category: str = Field(..., min_length=1, max_length=100, description="Category name, e.g. Food")
    division: Division
    description: str = Field(..., min_length=1, max_length=200, description="E.g. Lunch at Cafe")
    date: Optional[datetime] = Field(None, description="ISO 8601 date/time of the transaction")
    account: str = Field("default", min_length=1, max_length=100)

    @field_validator("category", "description", "account", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("date")
    @classmethod
    def naive_local_date(cls, value):
        return as_local(value) if value is not None else value

class TransactionCreate(TransactionBase):
    pass

class TransactionUpdate(APIModel):
    type: Optional[TransactionType] = None
    amount: Optional[float] = Field(None, ge=MIN_AMOUNT, allow_inf_nan=False)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    division: Optional[Division] = None
    description: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[datetime] = None
    account: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("category", "description", "account", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("date")
    @classmethod
    def naive_local_date(cls, value):
        return as_local(value) if value is not None else value

class TransactionRead(TransactionBase):
    id: uuid.UUID
    user_id: uuid.UUID
    date: datetime
    created_at: datetime
    updated_at: datetime
    can_edit: bool

class Pagination(APIModel):
    total: int
    page: int
    limit: int
    pages: int

class TransactionPage(APIModel):
    transactions: List[TransactionRead]
    pagination: Pagination

class CategorySummaryRow(APIModel):
    category: str
    type: TransactionType
    total: float
    count: int

class CategorySummary(APIModel):
    summary: List[CategorySummaryRow]
