# money_manager/schemas/dashboard.py
from typing import List, Optional
from datetime import datetime

from money_manager.models.transaction import Division, TransactionType
from money_manager.schemas.base import APIModel
from money_manager.schemas.transaction import CategorySummaryRow, TransactionRead
from money_manager.utils.periods import TimePeriod

class DateRangeRead(APIModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

class Summary(APIModel):
    income: float
    expense: float
    balance: float
    income_count: int
    expense_count: int

class DivisionBreakdownRow(APIModel):
    division: Division
    type: TransactionType
    total: float
    count: int

class Overview(APIModel):
    period: TimePeriod
    date_range: DateRangeRead
    summary: Summary
    category_breakdown: List[CategorySummaryRow]
    division_breakdown: List[DivisionBreakdownRow]

class TrendRow(APIModel):
    date: str
    type: TransactionType
    total: float
    count: int

class TrendPoint(APIModel):
    date: str
    income: float = 0.0
    expense: float = 0.0

class Trends(APIModel):
    period: TimePeriod
    date_range: DateRangeRead
    trends: List[TrendRow]
    series: List[TrendPoint]

class RecentTransactions(APIModel):
    transactions: List[TransactionRead]

class AccountRow(APIModel):
    account: str
    income: float
    expense: float
    balance: float
    transaction_count: int

class AccountSummary(APIModel):
    accounts: List[AccountRow]

class TypeStatistics(APIModel):
    type: TransactionType
    total: float
    count: int
    average: float
    max: float
    min: float

class Statistics(APIModel):
    date_range: DateRangeRead
    overall: List[TypeStatistics]
    by_category: List[CategorySummaryRow]
    by_division: List[DivisionBreakdownRow]
