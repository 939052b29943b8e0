"""
Core Data Models

Plain records shared by the matcher, the income aggregator and the data
manager. Every record converts to and from the JSON-friendly dicts that
are persisted in the user profile.
"""
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from .currency import to_amount


class CategoryType:
    """Allowed values for Category.type"""
    INCOME = 'income'
    EXPENSE = 'expense'
    SAVINGS = 'savings'
    SYSTEM = 'system'  # Only the built-in Ignore category

    USER_TYPES = (INCOME, EXPENSE, SAVINGS)


class Frequency:
    """Recognized income/expense frequencies"""
    WEEKLY = 'Weekly'
    BI_WEEKLY = 'Bi-weekly'
    MONTHLY = 'Monthly'
    YEARLY = 'Yearly'
    ONE_TIME = 'One-time'

    ALL = (WEEKLY, BI_WEEKLY, MONTHLY, YEARLY, ONE_TIME)


def parse_date(value) -> Optional[date]:
    """Accept a date, a datetime or an ISO string; anything else is None"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


@dataclass
class Category:
    """A budget category with its matching hints"""
    id: str
    name: str
    type: str
    keywords: List[str] = field(default_factory=list)
    budget: Optional[Decimal] = None
    merchant_mappings: Dict[str, str] = field(default_factory=dict)
    is_system: bool = False

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'keywords': list(self.keywords),
            'budget': str(self.budget) if self.budget is not None else None,
            'merchantMappings': dict(self.merchant_mappings),
            'isSystemCategory': self.is_system,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Category':
        budget = data.get('budget')
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            type=str(data.get('type', CategoryType.EXPENSE)).lower(),
            keywords=list(data.get('keywords') or []),
            budget=to_amount(budget) if budget not in (None, '') else None,
            merchant_mappings=dict(data.get('merchantMappings') or {}),
            is_system=bool(data.get('isSystemCategory', False)),
        )


@dataclass
class Transaction:
    """An imported or manually entered transaction"""
    id: str
    date: Optional[date]
    description: str
    amount: Decimal
    category: Optional[Category] = None
    sample: bool = False

    # Filled by categorization
    confidence: float = 0.0
    needs_review: bool = True
    confirmed: bool = False
    split_from: Optional[str] = None

    def with_category(self, category: Optional[Category], confidence: float,
                      needs_review: bool) -> 'Transaction':
        """Return a copy with a new category assignment"""
        return replace(self, category=category, confidence=confidence,
                       needs_review=needs_review)

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'date': self.date.isoformat() if self.date else None,
            'description': self.description,
            'amount': str(self.amount),
            'category': self.category.to_dict() if self.category else None,
            'sample': self.sample,
            'confidence': self.confidence,
            'needsReview': self.needs_review,
            'confirmed': self.confirmed,
            'splitFrom': self.split_from,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Transaction':
        category = data.get('category')
        return cls(
            id=str(data.get('id', '')),
            date=parse_date(data.get('date')),
            description=data.get('description') or '',
            amount=to_amount(data.get('amount', 0)),
            category=Category.from_dict(category) if isinstance(category, dict) else None,
            sample=bool(data.get('sample', False)),
            confidence=float(data.get('confidence') or 0.0),
            needs_review=bool(data.get('needsReview', True)),
            confirmed=bool(data.get('confirmed', False)),
            split_from=data.get('splitFrom'),
        )


@dataclass
class IncomeSource:
    """A recurring or one-time income entry captured during onboarding"""
    name: str
    amount: Decimal
    frequency: str = Frequency.MONTHLY

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'amount': str(self.amount),
            'frequency': self.frequency,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'IncomeSource':
        return cls(
            name=data.get('name') or '',
            amount=to_amount(data.get('amount', 0)),
            frequency=data.get('frequency') or '',
        )
