"""
Merchant Normalization Module

Converts raw bank descriptions into clean, normalized merchant names
used as stable lookup keys for merchant mappings, and flags descriptions
that need special handling (card payments, split-worthy purchases).
"""
import re
from decimal import Decimal

# Applied in order to the trimmed description
NOISE_PATTERNS = [
    (r'\s+\d{4,}.*$', ''),  # Store/transaction IDs and everything after
    (r'\s+#\d+', ''),  # Location numbers like "#1234"
    (r'\*[\w*]*$', ''),  # Trailing asterisk runs with their reference codes
    (r'\s{2,}', ' '),  # Repeated whitespace
]

PAYMENT_KEYWORDS = [
    'payment thank you',
    'autopay',
    'online payment',
    'card payment',
    'credit card payment',
    'balance payment',
]

# Merchants whose single orders usually span several budget categories
SPLIT_KEYWORDS = [
    'amazon', 'walmart', 'target', 'costco', "sam's club",
    'grocery', 'supermarket', 'department store', 'wholesale',
]

SPLIT_AMOUNT_THRESHOLD = Decimal('100')


def normalize_merchant_name(description: str) -> str:
    """
    Normalize a raw transaction description into a merchant key.

    Args:
        description: Raw description from the bank export

    Returns:
        Lowercase merchant name, or "" for an empty description

    Examples:
        "WALMART #1234"      -> "walmart"
        "AMAZON.COM*AB12CD"  -> "amazon.com"
        "SHELL OIL 57444"    -> "shell oil"
    """
    if not description:
        return ''

    # Repeat until stable: stripping one asterisk tail can expose another
    text = description.strip()
    previous = None
    while text != previous:
        previous = text
        for pattern, replacement in NOISE_PATTERNS:
            text = re.sub(pattern, replacement, text)
        text = text.strip()

    return text.lower()


def is_credit_card_payment(description: str) -> bool:
    """True when the description looks like a card payment, not a purchase"""
    if not description:
        return False

    desc = description.lower()
    return any(keyword in desc for keyword in PAYMENT_KEYWORDS)


def is_split_worthy(transaction) -> bool:
    """
    Flag a transaction as a candidate for splitting across categories.

    Either the merchant is a known multi-category store, or the amount is
    over 100 and the transaction is not already assigned to a rent category.
    """
    if transaction is None or not transaction.description:
        return False

    description = transaction.description.lower()
    if any(keyword in description for keyword in SPLIT_KEYWORDS):
        return True

    category_id = transaction.category.id if transaction.category else ''
    is_large = abs(Decimal(str(transaction.amount))) > SPLIT_AMOUNT_THRESHOLD
    return is_large and 'rent' not in (category_id or '')
