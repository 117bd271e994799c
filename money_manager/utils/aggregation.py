# money_manager/utils/aggregation.py
"""
Dashboard figures for one user.

Every function here is read-only and takes the owner id and session
explicitly. Grouped sums, trend buckets included, come from a single
``group_and_aggregate`` query each.
"""
from collections import defaultdict
from datetime import date
from typing import Any, Dict, List, Optional
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from money_manager.crud.transaction import (
    AggregateRow,
    GroupKey,
    TransactionFilters,
    get_recent_transactions,
    group_and_aggregate,
)
from money_manager.models.transaction import TransactionType
from money_manager.utils.periods import DateRange, TimePeriod, end_of_day, start_of_day

CATEGORY_BREAKDOWN_LIMIT = 10
TYPES = (TransactionType.income.value, TransactionType.expense.value)


def _range_filter(date_range: DateRange) -> TransactionFilters:
    return TransactionFilters(start_date=date_range.start, end_date=date_range.end)


def _grouped(rows: List[AggregateRow]) -> List[Dict[str, Any]]:
    return [{**row.key, "total": row.total, "count": row.count} for row in rows]


# ────────────────────────────────────────────────────────────────────────────────
# OVERVIEW
# ────────────────────────────────────────────────────────────────────────────────
async def totals_by_type(
    user_id: uuid.UUID,
    db: AsyncSession,
    filters: Optional[TransactionFilters] = None,
) -> Dict[str, Dict[str, Any]]:
    """Income and expense sums/counts; a side with no rows reports 0/0."""
    totals = {t: {"total": 0.0, "count": 0} for t in TYPES}
    for row in await group_and_aggregate(user_id, [GroupKey.type], db, filters):
        totals[row.key["type"]] = {"total": row.total, "count": row.count}
    return totals


def summarize(totals: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    income = totals[TransactionType.income.value]
    expense = totals[TransactionType.expense.value]
    return {
        "income": income["total"],
        "expense": expense["total"],
        "balance": income["total"] - expense["total"],
        "income_count": income["count"],
        "expense_count": expense["count"],
    }


async def category_breakdown(
    user_id: uuid.UUID,
    db: AsyncSession,
    filters: Optional[TransactionFilters] = None,
    limit: Optional[int] = CATEGORY_BREAKDOWN_LIMIT,
) -> List[Dict[str, Any]]:
    rows = await group_and_aggregate(
        user_id,
        [GroupKey.category, GroupKey.type],
        db,
        filters,
        order_by_total=True,
        limit=limit,
    )
    return _grouped(rows)


async def division_breakdown(
    user_id: uuid.UUID,
    db: AsyncSession,
    filters: Optional[TransactionFilters] = None,
) -> List[Dict[str, Any]]:
    rows = await group_and_aggregate(user_id, [GroupKey.division, GroupKey.type], db, filters)
    return _grouped(rows)


async def overview(user_id: uuid.UUID, date_range: DateRange, db: AsyncSession) -> Dict[str, Any]:
    filters = _range_filter(date_range)
    totals = await totals_by_type(user_id, db, filters)
    return {
        "period": date_range.period,
        "date_range": {"start_date": date_range.start, "end_date": date_range.end},
        "summary": summarize(totals),
        "category_breakdown": await category_breakdown(user_id, db, filters),
        "division_breakdown": await division_breakdown(user_id, db, filters),
    }


# ────────────────────────────────────────────────────────────────────────────────
# TRENDS
# ────────────────────────────────────────────────────────────────────────────────
def bucket_group_key(period: TimePeriod) -> GroupKey:
    """Yearly trends bucket by month; every other period by day."""
    return GroupKey.month if period == TimePeriod.yearly else GroupKey.day


async def bucket_trends(
    user_id: uuid.UUID,
    date_range: DateRange,
    db: AsyncSession,
) -> List[Dict[str, Any]]:
    """(bucket, type) sums, ascending by bucket; empty (bucket, type) pairs are not emitted."""
    bucket = bucket_group_key(date_range.period)
    rows = await group_and_aggregate(user_id, [bucket, GroupKey.type], db, _range_filter(date_range))
    points = [
        {"date": row.key[bucket.value], "type": row.key["type"], "total": row.total, "count": row.count}
        for row in rows
    ]
    return sorted(points, key=lambda row: (row["date"], row["type"]))


def combine_trend_series(trends: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One {date, income, expense} point per bucket, missing types defaulting to 0."""
    series: Dict[str, Dict[str, Any]] = {}
    for row in trends:
        point = series.setdefault(row["date"], {"date": row["date"], "income": 0.0, "expense": 0.0})
        point[row["type"]] = row["total"]
    return [series[bucket] for bucket in sorted(series)]


async def trends(user_id: uuid.UUID, date_range: DateRange, db: AsyncSession) -> Dict[str, Any]:
    rows = await bucket_trends(user_id, date_range, db)
    return {
        "period": date_range.period,
        "date_range": {"start_date": date_range.start, "end_date": date_range.end},
        "trends": rows,
        "series": combine_trend_series(rows),
    }


# ────────────────────────────────────────────────────────────────────────────────
# RECENT / ACCOUNTS
# ────────────────────────────────────────────────────────────────────────────────
async def recent(user_id: uuid.UUID, db: AsyncSession, limit: int = 10) -> Dict[str, Any]:
    return {"transactions": await get_recent_transactions(db, user_id, limit=limit)}


async def account_summary(user_id: uuid.UUID, db: AsyncSession) -> Dict[str, Any]:
    """Per-account income/expense/balance over the user's whole history."""
    per_account: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(
        lambda: {t: {"total": 0.0, "count": 0} for t in TYPES}
    )
    for row in await group_and_aggregate(user_id, [GroupKey.account, GroupKey.type], db):
        per_account[row.key["account"]][row.key["type"]] = {"total": row.total, "count": row.count}

    accounts = []
    for account in sorted(per_account):
        income = per_account[account][TransactionType.income.value]
        expense = per_account[account][TransactionType.expense.value]
        accounts.append({
            "account": account,
            "income": income["total"],
            "expense": expense["total"],
            "balance": income["total"] - expense["total"],
            "transaction_count": income["count"] + expense["count"],
        })
    return {"accounts": accounts}


# ────────────────────────────────────────────────────────────────────────────────
# STATISTICS
# ────────────────────────────────────────────────────────────────────────────────
def explicit_range_filter(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    transaction_type: Optional[TransactionType] = None,
) -> TransactionFilters:
    """Filters for caller-supplied dates; the end date covers its whole day."""
    return TransactionFilters(
        type=transaction_type,
        start_date=start_of_day(start_date) if start_date else None,
        end_date=end_of_day(end_date) if end_date else None,
    )


async def statistics(
    user_id: uuid.UUID,
    db: AsyncSession,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    filters = explicit_range_filter(start_date, end_date)
    overall = await group_and_aggregate(user_id, [GroupKey.type], db, filters, with_extrema=True)
    return {
        "date_range": {"start_date": filters.start_date, "end_date": filters.end_date},
        "overall": [
            {
                "type": row.key["type"],
                "total": row.total,
                "count": row.count,
                "average": row.average,
                "max": row.max,
                "min": row.min,
            }
            for row in overall
        ],
        "by_category": await category_breakdown(user_id, db, filters, limit=None),
        "by_division": await division_breakdown(user_id, db, filters),
    }
