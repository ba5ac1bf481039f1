from datetime import date
from decimal import Decimal, InvalidOperation
from models import CATEGORIES, NewRecord


# Largest value a DECIMAL(12, 2) column holds.
MAX_AMOUNT = Decimal('9999999999.99')


class EntryError(ValueError):
    pass


def parse_entry(form, kind):
    """Build a NewRecord from a submitted income or expense form."""
    date_str = form.get('date', '').strip()
    amount_str = form.get('amount', '').strip()
    description = form.get('description', '').strip()
    category = form.get('category', '').strip().upper()

    if not date_str or not amount_str or not description:
        raise EntryError("Date, amount and description are required.")

    try:
        entry_date = date.fromisoformat(date_str)
    except ValueError:
        raise EntryError("Please enter a valid date.")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise EntryError("Amount must be a number.")
    if not amount.is_finite():
        raise EntryError("Amount must be a number.")
    if amount < 0:
        raise EntryError("Amount must be zero or more.")
    if amount > MAX_AMOUNT:
        raise EntryError(f"Amount cannot exceed {MAX_AMOUNT:,}.")
    amount = amount.quantize(Decimal('0.01'))

    if category not in CATEGORIES[kind]:
        raise EntryError(f"Unknown category: {category or 'none'}.")

    return NewRecord(date=entry_date, amount=amount, description=description, category=category)
