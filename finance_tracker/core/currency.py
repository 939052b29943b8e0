"""
Currency Helpers

All money is carried as Decimal quantized to cents so that sums and
frequency conversions never drift the way float arithmetic does.
Parsing is forgiving: anything that is not a number becomes 0.00.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Optional, Tuple

CENT = Decimal('0.01')
ZERO = Decimal('0.00')
MAX_AMOUNT = Decimal('999999999.99')


def to_amount(value) -> Decimal:
    """
    Parse a user or storage value into a cent-exact Decimal.

    Args:
        value: str, int, float or Decimal ("$1,234.50" is accepted)

    Returns:
        Decimal rounded half-up to cents, or 0.00 when unparseable
    """
    if value is None or value == '' or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).replace('$', '').replace(',', '').strip()
        try:
            number = Decimal(text)
        except InvalidOperation:
            return ZERO

    if not number.is_finite():
        return ZERO
    try:
        return number.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the decimal context can hold
        return ZERO


def to_cents(value) -> int:
    """Amount as an integer number of cents"""
    return int(to_amount(value) * 100)


def from_cents(cents: int) -> Decimal:
    """Integer cents back to a Decimal amount"""
    return (Decimal(int(cents)) / 100).quantize(CENT)


def add(*amounts) -> Decimal:
    return from_cents(sum(to_cents(a) for a in amounts))


def subtract(minuend, *subtrahends) -> Decimal:
    return from_cents(to_cents(minuend) - sum(to_cents(s) for s in subtrahends))


def multiply(amount, multiplier) -> Decimal:
    product = to_amount(amount) * Decimal(str(multiplier))
    return product.quantize(CENT, rounding=ROUND_HALF_UP)


def divide(amount, divisor) -> Decimal:
    """Divide and round to cents; dividing by zero yields 0.00"""
    divisor = Decimal(str(divisor))
    if divisor == 0:
        return ZERO
    return (to_amount(amount) / divisor).quantize(CENT, rounding=ROUND_HALF_UP)


def compare(first, second) -> int:
    """-1, 0 or 1 comparing two amounts at cent precision"""
    a, b = to_cents(first), to_cents(second)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def is_equal(first, second) -> bool:
    return compare(first, second) == 0


def is_positive(amount) -> bool:
    return to_cents(amount) > 0


def abs_amount(amount) -> Decimal:
    return abs(to_amount(amount))


def parse_currency_input(text: str) -> str:
    """
    Clean free-form user input into a decimal string.

    Keeps digits and the first decimal point, limited to two decimals.
    "$1,2a3.456" -> "123.45"
    """
    if not text or not isinstance(text, str):
        return ''

    cleaned = ''.join(ch for ch in text if ch.isdigit() or ch == '.')
    parts = cleaned.split('.')
    if len(parts) > 2:
        cleaned = parts[0] + '.' + ''.join(parts[1:])
        parts = cleaned.split('.')
    if len(parts) == 2 and len(parts[1]) > 2:
        cleaned = parts[0] + '.' + parts[1][:2]
    return cleaned


def format_currency(amount, show_cents: bool = True, symbol: str = '$') -> str:
    """Format an amount for display, e.g. -$1,234.50"""
    value = to_amount(amount)
    sign = '-' if value < 0 else ''
    if show_cents:
        body = f"{abs(value):,.2f}"
    else:
        body = f"{abs(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP):,}"
    return f"{sign}{symbol}{body}"


def validate_currency_input(value) -> Tuple[bool, Optional[str]]:
    """
    Validate an amount entered by the user.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or value == '':
        return False, 'Amount is required'

    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return False, 'Please enter a valid amount'
    else:
        text = str(value).replace('$', '').replace(',', '').strip()
        try:
            number = Decimal(text)
        except InvalidOperation:
            return False, 'Please enter a valid amount'

    if not number.is_finite():
        return False, 'Please enter a valid amount'
    if number < 0:
        return False, 'Amount cannot be negative'
    if number > MAX_AMOUNT:
        return False, 'Amount is too large'

    return True, None


def check_budget_balance(total_income, total_expenses, total_savings) -> Dict:
    """
    Compare income against expenses plus savings.

    A budget is balanced when the difference is within one cent.
    """
    difference_cents = to_cents(total_income) - to_cents(total_expenses) - to_cents(total_savings)

    return {
        'is_balanced': abs(difference_cents) <= 1,
        'is_over_budget': difference_cents < 0,
        'is_under_budget': difference_cents > 0,
        'difference': from_cents(abs(difference_cents)),
        'remaining': from_cents(difference_cents),
    }
