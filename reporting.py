"""
Dashboard aggregation: totals, the recent activity feed and the per-month
income/expense series for a date range.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Sequence

from models import DateRange, Kind, MonthBucket, Record, SummaryData, Transaction

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 10


def month_keys(date_range: DateRange) -> List[str]:
    """`YYYY-MM` keys from the start month through the end month, inclusive."""
    year, month = date_range.start_date.year, date_range.start_date.month
    end = (date_range.end_date.year, date_range.end_date.month)
    keys = []
    while (year, month) <= end:
        keys.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return keys


def total(records: Sequence[Record]) -> Decimal:
    return sum((r.amount for r in records), Decimal('0'))


def recent_transactions(income: Sequence[Record], expenses: Sequence[Record],
                        limit: int = RECENT_TRANSACTIONS_LIMIT) -> List[Transaction]:
    tagged = [Transaction.from_record(r, Kind.INCOME) for r in income]
    tagged += [Transaction.from_record(r, Kind.EXPENSE) for r in expenses]
    tagged.sort(key=lambda t: t.date, reverse=True)
    return tagged[:limit]


def monthly_buckets(income: Sequence[Record], expenses: Sequence[Record],
                    date_range: DateRange) -> List[MonthBucket]:
    """
    Bucket amounts by calendar month over `date_range`.

    Only months inside the range get a bucket. A record dated outside the
    range is left out of the series (it still counts towards the totals);
    this is logged so a mismatch between fetch range and bucket range shows up.
    """
    buckets: Dict[str, MonthBucket] = {key: MonthBucket(month=key) for key in month_keys(date_range)}

    for record in income:
        bucket = buckets.get(record.month_key)
        if bucket is None:
            logger.warning("Income record %s dated %s is outside %s..%s; left out of monthly data",
                           record.id, record.date, date_range.start_date, date_range.end_date)
            continue
        bucket.income += record.amount

    for record in expenses:
        bucket = buckets.get(record.month_key)
        if bucket is None:
            logger.warning("Expense record %s dated %s is outside %s..%s; left out of monthly data",
                           record.id, record.date, date_range.start_date, date_range.end_date)
            continue
        bucket.expenses += record.amount

    return sorted(buckets.values(), key=lambda b: b.month)


def build_summary(income: Sequence[Record], expenses: Sequence[Record], date_range: DateRange,
                  recent_limit: int = RECENT_TRANSACTIONS_LIMIT) -> SummaryData:
    total_income = total(income)
    total_expenses = total(expenses)
    return SummaryData(
        total_income=total_income,
        total_expenses=total_expenses,
        net_profit=total_income - total_expenses,
        recent_transactions=recent_transactions(income, expenses, recent_limit),
        monthly_data=monthly_buckets(income, expenses, date_range),
    )
