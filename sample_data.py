import random
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from models import EXPENSE_CATEGORIES, NewRecord

INCOME_DESCRIPTIONS = [
    'Weekend Rental',
    'Week-long Stay',
    'Holiday Package',
    'Extended Stay',
    'Last Minute Booking',
    'Special Event Rental',
    'Corporate Retreat',
    'Family Gathering',
]

EXPENSE_DESCRIPTIONS = [
    'Monthly Utilities',
    'Cleaning Service',
    'Maintenance Repair',
    'Property Insurance',
    'New Furniture',
    'Landscaping',
    'Plumbing Fix',
    'Electrical Work',
]

SAMPLE_INCOME_CATEGORIES = ('RENTAL', 'SERVICES', 'OTHER')


def random_amount(rng: random.Random, low: int, high: int) -> Decimal:
    return Decimal(str(round(rng.uniform(low, high), 2))).quantize(Decimal('0.01'))


def random_date(rng: random.Random, today: date) -> date:
    """A day within the three months up to and including `today`."""
    start = today - relativedelta(months=3)
    return start + timedelta(days=rng.randint(0, (today - start).days))


def _generate(count, today, rng, low, high, descriptions, categories) -> List[NewRecord]:
    rng = rng or random.Random()
    today = today or date.today()
    return [
        NewRecord(
            date=random_date(rng, today),
            amount=random_amount(rng, low, high),
            description=rng.choice(descriptions),
            category=rng.choice(categories),
        )
        for _ in range(count)
    ]


def generate_sample_income(count: int = 5, today: Optional[date] = None,
                           rng: Optional[random.Random] = None) -> List[NewRecord]:
    return _generate(count, today, rng, 500, 2000, INCOME_DESCRIPTIONS, SAMPLE_INCOME_CATEGORIES)


def generate_sample_expenses(count: int = 5, today: Optional[date] = None,
                             rng: Optional[random.Random] = None) -> List[NewRecord]:
    return _generate(count, today, rng, 100, 800, EXPENSE_DESCRIPTIONS, EXPENSE_CATEGORIES)
