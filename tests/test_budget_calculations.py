"""
Tests for monthly budget math over the onboarding profile
"""
from decimal import Decimal

import pytest

from finance_tracker.core.budget_calculations import (
    calculate_available_for_expenses,
    calculate_budget_performance,
    calculate_monthly_income,
    calculate_net_worth,
    calculate_total_monthly_expenses,
    calculate_total_monthly_savings,
    check_budget_balance,
    to_monthly,
)
from finance_tracker.core.category_enhancer import create_ignore_category
from finance_tracker.core.models import Category, CategoryType


@pytest.fixture
def profile():
    return {
        'income': {'incomeSources': [{'name': 'Job', 'amount': '6000', 'frequency': 'Monthly'}]},
        'expenses': {'expenseCategories': [
            {'name': 'Housing', 'amount': '2000', 'frequency': 'Monthly'},
            {'name': 'Groceries', 'amount': '150', 'frequency': 'Weekly'},
            {'name': 'Insurance', 'amount': '1200', 'frequency': 'Yearly'},
        ]},
        'savingsAllocation': {
            'emergencyFund': {'hasExisting': False, 'monthlyAmount': '500'},
            'savingsGoals': [{'name': 'Vacation', 'amount': '200'}],
        },
    }


def test_to_monthly():
    assert to_monthly(150, 'Weekly') == Decimal('650.00')
    assert to_monthly(1200, 'Yearly') == Decimal('100.00')
    assert to_monthly(80, None) == Decimal('80.00')


def test_monthly_expenses(profile):
    assert calculate_total_monthly_expenses(profile['expenses']['expenseCategories']) == Decimal('2750.00')
    assert calculate_total_monthly_expenses(None) == Decimal('0.00')


def test_monthly_savings(profile):
    assert calculate_total_monthly_savings(profile['savingsAllocation']) == Decimal('700.00')


def test_existing_emergency_fund_needs_no_contribution(profile):
    allocation = dict(profile['savingsAllocation'], emergencyFund={'hasExisting': True, 'monthlyAmount': '500'})
    assert calculate_total_monthly_savings(allocation) == Decimal('200.00')
    assert calculate_total_monthly_savings(None) == Decimal('0.00')


def test_monthly_income(profile):
    assert calculate_monthly_income(profile) == Decimal('6000.00')
    assert calculate_monthly_income(None) == Decimal('0.00')


def test_available_for_expenses():
    assert calculate_available_for_expenses('6000', '700') == Decimal('5300.00')


def test_budget_balance(profile):
    result = check_budget_balance(profile)
    assert result['is_under_budget']
    assert result['remaining'] == Decimal('2550.00')


def test_net_worth():
    result = calculate_net_worth(
        assets=[{'name': 'Checking', 'amount': '10000'}, {'name': 'Car', 'amount': '2500.50'}],
        liabilities=[{'name': 'Student Loan', 'amount': '15000'}],
    )
    assert result['total_assets'] == Decimal('12500.50')
    assert result['total_liabilities'] == Decimal('15000.00')
    assert result['net_worth'] == Decimal('-2499.50')
    assert result['is_positive'] is False


def test_net_worth_empty():
    result = calculate_net_worth()
    assert result['net_worth'] == Decimal('0.00')
    assert result['is_positive'] is True


def test_budget_performance(profile, make_txn, groceries, salary):
    vacation = Category(id='savings-vacation', name='Vacation', type=CategoryType.SAVINGS)
    transactions = [
        make_txn('PAYROLL DIRECT DEPOSIT', '3000.00', category=salary),
        make_txn('WHOLE FOODS MARKET', '-100.00', category=groceries),
        make_txn('PAYMENT THANK YOU', '-500.00', category=create_ignore_category()),
        make_txn('TRANSFER TO VACATION FUND', '-200.00', category=vacation),
        make_txn('ACME WIDGETS', '-50.00'),
    ]

    performance = calculate_budget_performance(profile, transactions)

    assert performance['income'] == {'planned': Decimal('6000.00'), 'actual': Decimal('3000.00')}
    assert performance['expenses'] == {'planned': Decimal('2750.00'), 'actual': Decimal('350.00')}
    assert performance['savings'] == {'planned': Decimal('700.00'), 'actual': Decimal('200.00')}
