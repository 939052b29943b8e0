"""
Transaction Splitter

Breaks one purchase (a mixed Amazon or Costco order, say) into child
transactions filed under different categories. The parts must add back
up to the original amount.
"""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import List, Optional

from . import currency
from .models import Category, Transaction


@dataclass
class SplitItem:
    """One part of a split: unsigned amount plus where it goes"""
    amount: Decimal
    category: Optional[Category] = None
    description: Optional[str] = None


def auto_distribute(amount, count: int) -> List[Decimal]:
    """
    Divide an amount into equal cent-exact parts.

    The last part absorbs the rounding remainder:
        auto_distribute(100, 3) -> [33.33, 33.33, 33.34]
    """
    if count < 1:
        return []

    total = currency.abs_amount(amount)
    part = currency.divide(total, count)
    last = currency.subtract(total, currency.multiply(part, count - 1))
    return [part] * (count - 1) + [last]


def split_transaction(transaction: Transaction, items: List[SplitItem]) -> List[Transaction]:
    """
    Replace a transaction with its parts.

    Args:
        transaction: The transaction being split
        items: Parts with unsigned amounts

    Returns:
        Child transactions "<id>-split-<n>" with the parent's date and sign,
        confirmed at full confidence

    Raises:
        ValueError: if there are no parts or they do not add up to the
            original amount exactly, at cent precision
    """
    if not items:
        raise ValueError("A split needs at least one item")

    original = currency.abs_amount(transaction.amount)
    allocated = currency.add(*[item.amount for item in items])
    remaining = currency.subtract(original, allocated)
    if abs(currency.to_cents(remaining)) >= 1:
        raise ValueError(f"Split amounts must add up to {original} (remaining: {remaining})")

    sign = -1 if transaction.amount < 0 else 1
    children = []
    for index, item in enumerate(items, start=1):
        children.append(replace(
            transaction,
            id=f"{transaction.id}-split-{index}",
            description=item.description or f"{transaction.description} - Item {index}",
            amount=currency.to_amount(item.amount) * sign,
            category=item.category,
            confidence=1.0,
            needs_review=False,
            confirmed=True,
            split_from=transaction.id,
        ))
    return children
