# money_manager/api/v1/routes/dashboard.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Optional

from money_manager.core.database import get_async_session
from money_manager.models.user import User
from money_manager.api.deps import get_current_user
from money_manager.schemas.dashboard import AccountSummary, Overview, RecentTransactions, Statistics, Trends
from money_manager.utils import aggregation
from money_manager.utils.periods import resolve_date_range

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

PERIOD_DESCRIPTION = "daily, weekly, monthly or yearly; anything else is treated as monthly"

@router.get("/overview", response_model=Overview)
async def get_overview(
    period: str = Query("monthly", description=PERIOD_DESCRIPTION),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Income/expense totals, balance, top categories and divisions for the current period."""
    return await aggregation.overview(user.id, resolve_date_range(period), db)

@router.get("/trends", response_model=Trends)
async def get_trends(
    period: str = Query("monthly", description=PERIOD_DESCRIPTION),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Per-day totals (per-month for yearly) within the current period."""
    return await aggregation.trends(user.id, resolve_date_range(period), db)

@router.get("/recent", response_model=RecentTransactions)
async def get_recent(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await aggregation.recent(user.id, db, limit=limit)

@router.get("/accounts", response_model=AccountSummary)
async def get_accounts(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Balance per account across all time, whatever period the dashboard shows."""
    return await aggregation.account_summary(user.id, db)

@router.get("/statistics", response_model=Statistics)
async def get_statistics(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await aggregation.statistics(user.id, db, start_date, end_date)
