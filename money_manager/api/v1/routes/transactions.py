# money_manager/api/v1/routes/transactions.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Optional
import math
import uuid

from money_manager.schemas.transaction import (
    CategorySummary,
    Pagination,
    TransactionCreate,
    TransactionPage,
    TransactionRead,
    TransactionUpdate,
)
from money_manager.crud.transaction import (
    count_transactions,
    create_transaction_for_user,
    delete_transaction_for_user,
    get_owned_transaction,
    get_transactions_for_user,
    update_transaction_for_user,
)
from money_manager.core.database import get_async_session
from money_manager.models.transaction import Division, TransactionType
from money_manager.models.user import User
from money_manager.api.deps import get_current_user
from money_manager.utils.aggregation import category_breakdown, explicit_range_filter

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.get("", response_model=TransactionPage)
async def read_transactions(
    transaction_type: Optional[TransactionType] = Query(None, alias="type"),
    category: Optional[str] = Query(None),
    division: Optional[Division] = Query(None),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    account: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Newest first (business date, then creation time), one page at a time."""
    filters = explicit_range_filter(start_date, end_date, transaction_type)
    filters.category = category
    filters.division = division
    filters.account = account

    transactions = await get_transactions_for_user(
        user.id, db, filters, offset=(page - 1) * limit, limit=limit
    )
    total = await count_transactions(user.id, db, filters)
    return TransactionPage(
        transactions=[TransactionRead.model_validate(tx) for tx in transactions],
        pagination=Pagination(total=total, page=page, limit=limit, pages=math.ceil(total / limit)),
    )

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_transaction_for_user(user.id, tx_in, db)

@router.get("/summary/by-category", response_model=CategorySummary)
async def read_category_summary(
    transaction_type: Optional[TransactionType] = Query(None, alias="type"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    filters = explicit_range_filter(start_date, end_date, transaction_type)
    summary = await category_breakdown(user.id, db, filters, limit=None)
    return {"summary": summary}

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_owned_transaction(transaction_id, user.id, db)

@router.put("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await update_transaction_for_user(transaction_id, user.id, tx_in, db)

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    await delete_transaction_for_user(transaction_id, user.id, db)
    return None
