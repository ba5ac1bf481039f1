from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class Kind(str, Enum):
    INCOME = 'INCOME'
    EXPENSE = 'EXPENSE'


INCOME_CATEGORIES = ('RENTAL', 'SERVICE', 'SERVICES', 'OTHER')
EXPENSE_CATEGORIES = ('MAINTENANCE', 'UTILITIES', 'SUPPLIES', 'CLEANING', 'INSURANCE', 'OTHER')

CATEGORIES = {
    Kind.INCOME: INCOME_CATEGORIES,
    Kind.EXPENSE: EXPENSE_CATEGORIES,
}


class InvalidDateRange(ValueError):
    """Raised when a date range is malformed or ends before it starts."""


@dataclass(frozen=True)
class NewRecord:
    date: date
    amount: Decimal
    description: str
    category: str


@dataclass(frozen=True)
class Record:
    """A stored income or expense row."""
    id: str
    created_at: datetime
    date: date
    amount: Decimal
    description: str
    category: str

    @property
    def month_key(self) -> str:
        return self.date.isoformat()[:7]


@dataclass(frozen=True)
class Transaction:
    id: str
    date: date
    kind: Kind
    amount: Decimal
    description: str
    category: str

    @classmethod
    def from_record(cls, record: Record, kind: Kind) -> 'Transaction':
        return cls(
            id=record.id,
            date=record.date,
            kind=kind,
            amount=record.amount,
            description=record.description,
            category=record.category,
        )


@dataclass(frozen=True)
class DateRange:
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise InvalidDateRange('End date cannot be before start date')

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass
class MonthBucket:
    month: str
    income: Decimal = Decimal('0')
    expenses: Decimal = Decimal('0')


@dataclass(frozen=True)
class SummaryData:
    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    recent_transactions: List[Transaction] = field(default_factory=list)
    monthly_data: List[MonthBucket] = field(default_factory=list)

    @classmethod
    def empty(cls) -> 'SummaryData':
        zero = Decimal('0')
        return cls(total_income=zero, total_expenses=zero, net_profit=zero)


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    password_hash: Optional[str] = None
