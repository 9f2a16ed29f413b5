from decimal import Decimal, ROUND_HALF_UP

from finance_ledger.core.exceptions import ValidationError

CENTS = Decimal("0.01")
# Largest value a Numeric(14, 2) money column holds
MAX_AMOUNT = Decimal("999999999999.99")


def to_money(value) -> Decimal:
    """Normalize a stored or computed amount to two decimal places."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def checked_money(value, label: str = "Amount") -> Decimal:
    """
    to_money for incoming amounts. Rejects missing, non-finite and out-of-range values
    with a ValidationError; the result is already rounded to cents, so callers compare
    against zero after rounding.
    """
    if value is None:
        raise ValidationError(f"{label} is required")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite() or abs(value) > MAX_AMOUNT + 1:
        raise ValidationError(f"{label} is out of range")
    value = to_money(value)
    if abs(value) > MAX_AMOUNT:
        raise ValidationError(f"{label} is out of range")
    return value
