"""
Shared fixtures
"""
from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.core.models import Category, CategoryType, Transaction


@pytest.fixture
def make_txn():
    """Build a Transaction with sensible defaults"""
    def _make(description, amount='-10.00', category=None, txn_id='t1', txn_date=date(2025, 1, 15)):
        return Transaction(
            id=txn_id,
            date=txn_date,
            description=description,
            amount=Decimal(str(amount)),
            category=category,
        )
    return _make


@pytest.fixture
def groceries():
    return Category(
        id='expense-groceries',
        name='Groceries',
        type=CategoryType.EXPENSE,
        keywords=['grocery', 'whole foods', 'market', 'supermarket'],
    )


@pytest.fixture
def dining():
    return Category(
        id='expense-dining-out',
        name='Dining Out',
        type=CategoryType.EXPENSE,
        keywords=['restaurant', 'coffee', 'starbucks'],
    )


@pytest.fixture
def salary():
    return Category(
        id='income-salary',
        name='Salary',
        type=CategoryType.INCOME,
        keywords=['salary', 'payroll', 'direct deposit'],
    )


@pytest.fixture
def income_sources():
    return [
        {'name': 'Job', 'amount': 5000, 'frequency': 'Monthly'},
        {'name': 'Side', 'amount': 500, 'frequency': 'Monthly'},
    ]
