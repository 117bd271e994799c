# money_manager/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, func, literal_column
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import logging
import uuid

from money_manager.core.exceptions import EditWindowClosedError, NotFoundError
from money_manager.models.transaction import Division, Transaction, TransactionType
from money_manager.schemas.transaction import TransactionCreate, TransactionUpdate
from money_manager.utils.edit_window import can_mutate, utcnow
from money_manager.utils.periods import local_now

logger = logging.getLogger(__name__)


@dataclass
class TransactionFilters:
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    division: Optional[Division] = None
    account: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    def clauses(self) -> List[Any]:
        conditions = []
        if self.type is not None:
            conditions.append(Transaction.type == self.type)
        if self.category:
            conditions.append(Transaction.category == self.category)
        if self.division is not None:
            conditions.append(Transaction.division == self.division)
        if self.account:
            conditions.append(Transaction.account == self.account)
        if self.start_date is not None:
            conditions.append(Transaction.date >= self.start_date)
        if self.end_date is not None:
            conditions.append(Transaction.date <= self.end_date)
        return conditions


class GroupKey(str, Enum):
    type = "type"
    category = "category"
    division = "division"
    account = "account"
    # Calendar buckets of the business date, rendered as text
    day = "day"
    month = "month"

    def expression(self, dialect: str):
        """Column (or bucket expression) to select and group on for this key."""
        formats = BUCKET_FORMATS.get(self)
        if formats is None:
            return getattr(Transaction, self.value)
        sqlite_format, postgres_format = formats
        if dialect == "sqlite":
            return func.strftime(literal_column(f"'{sqlite_format}'"), Transaction.date)
        return func.to_char(Transaction.date, literal_column(f"'{postgres_format}'"))


# (strftime, to_char) patterns producing the same text on both dialects
BUCKET_FORMATS = {
    GroupKey.day: ("%Y-%m-%d", "YYYY-MM-DD"),
    GroupKey.month: ("%Y-%m", "YYYY-MM"),
}


@dataclass
class AggregateRow:
    key: Dict[str, Any]
    total: float
    count: int
    average: Optional[float] = None
    max: Optional[float] = None
    min: Optional[float] = None


def _owned(user_id: uuid.UUID, filters: Optional[TransactionFilters]) -> List[Any]:
    conditions = [Transaction.user_id == user_id]
    if filters is not None:
        conditions.extend(filters.clauses())
    return conditions


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


# ────────────────────────────────────────────────────────────────────────────────
# QUERIES
# ────────────────────────────────────────────────────────────────────────────────
async def get_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    filters: Optional[TransactionFilters] = None,
    offset: int = 0,
    limit: Optional[int] = None,
) -> List[Transaction]:
    query = (
        select(Transaction)
        .where(*_owned(user_id, filters))
        .order_by(desc(Transaction.date), desc(Transaction.created_at))
        .offset(offset)
    )
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return result.scalars().all()

async def count_transactions(user_id: uuid.UUID, db: AsyncSession, filters: Optional[TransactionFilters] = None) -> int:
    result = await db.execute(
        select(func.count(Transaction.id)).where(*_owned(user_id, filters))
    )
    return result.scalar_one()

async def get_transactions_in_range(
    user_id: uuid.UUID,
    start: datetime,
    end: datetime,
    db: AsyncSession,
) -> List[Transaction]:
    """All of a user's transactions whose business date falls in [start, end]."""
    return await get_transactions_for_user(
        user_id, db, TransactionFilters(start_date=start, end_date=end)
    )

async def get_recent_transactions(db: AsyncSession, user_id: uuid.UUID, limit: int = 10) -> List[Transaction]:
    """Get the most recent transactions for a user with optional limit"""
    return await get_transactions_for_user(user_id, db, limit=limit)

async def group_and_aggregate(
    user_id: uuid.UUID,
    group_by: Sequence[GroupKey],
    db: AsyncSession,
    filters: Optional[TransactionFilters] = None,
    with_extrema: bool = False,
    order_by_total: bool = False,
    limit: Optional[int] = None,
) -> List[AggregateRow]:
    """
    SUM/COUNT of amount per distinct combination of ``group_by`` columns,
    restricted to the owner and the optional filters. ``with_extrema`` adds
    AVG/MAX/MIN; ``order_by_total`` sorts by total descending.
    """
    if not group_by:
        raise ValueError("group_by needs at least one key")

    dialect = db.get_bind().dialect.name
    expressions = [key.expression(dialect) for key in group_by]
    columns = [expr.label(key.value) for key, expr in zip(group_by, expressions)]
    total = func.sum(Transaction.amount).label("total")
    aggregates = [total, func.count(Transaction.id).label("count")]
    if with_extrema:
        aggregates += [
            func.avg(Transaction.amount).label("average"),
            func.max(Transaction.amount).label("max"),
            func.min(Transaction.amount).label("min"),
        ]

    query = (
        select(*columns, *aggregates)
        .where(*_owned(user_id, filters))
        .group_by(*expressions)
    )
    if order_by_total:
        query = query.order_by(desc(total))
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    rows = []
    for row in result.mappings().all():
        rows.append(
            AggregateRow(
                key={key.value: _plain(row[key.value]) for key in group_by},
                total=float(row["total"] or 0),
                count=int(row["count"]),
                average=float(row["average"]) if with_extrema else None,
                max=float(row["max"]) if with_extrema else None,
                min=float(row["min"]) if with_extrema else None,
            )
        )
    return rows

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_owned_transaction(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Transaction:
    tx = await get_transaction_by_id(transaction_id, user_id, db)
    if tx is None:
        raise NotFoundError("Transaction not found")
    return tx

# ────────────────────────────────────────────────────────────────────────────────
# WRITES
# ────────────────────────────────────────────────────────────────────────────────
async def create_transaction_for_user(user_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    values = tx_in.model_dump()
    if values.get("date") is None:
        values["date"] = local_now()
    new_tx = Transaction(**values, user_id=user_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    logger.info(f"Transaction {new_tx.id} created for user {user_id}")
    return new_tx

async def update_transaction_for_user(
    transaction_id: uuid.UUID,
    user_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> Transaction:
    tx = await get_owned_transaction(transaction_id, user_id, db)
    if not can_mutate(tx.created_at, now):
        raise EditWindowClosedError("edited")
    for field_name, value in tx_in.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(tx, field_name, value)
    tx.updated_at = now or utcnow()
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

async def delete_transaction_for_user(
    transaction_id: uuid.UUID,
    user_id: uuid.UUID,
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> None:
    tx = await get_owned_transaction(transaction_id, user_id, db)
    if not can_mutate(tx.created_at, now):
        raise EditWindowClosedError("deleted")
    await db.delete(tx)
    await db.commit()
    logger.info(f"Transaction {transaction_id} deleted by user {user_id}")
