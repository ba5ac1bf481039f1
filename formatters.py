from decimal import Decimal, ROUND_HALF_UP, InvalidOperation


def group_indian(digits: str) -> str:
    """Group an integer digit string the en-IN way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups + [tail])


def format_currency(amount) -> str:
    try:
        value = Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return str(amount)

    sign = '-' if value < 0 else ''
    whole, fraction = f"{abs(value):.2f}".split('.')
    return f"{sign}{group_indian(whole)}.{fraction}"
