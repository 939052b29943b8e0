"""
Budget Calculations

Monthly totals and balance checks over the onboarding profile:
income sources, expense categories, savings allocation and net worth.
The profile is the plain dict persisted by the data manager.
"""
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from . import currency
from .currency import ZERO
from .income_aggregator import calculate_total_yearly_income, convert_from_yearly, convert_to_yearly
from .models import CategoryType, Frequency


def to_monthly(amount, frequency: Optional[str]) -> Decimal:
    """Monthly equivalent of an amount budgeted at any frequency"""
    yearly = convert_to_yearly(amount, frequency or Frequency.MONTHLY)
    return convert_from_yearly(yearly, Frequency.MONTHLY)


def calculate_total_monthly_expenses(expense_categories: Optional[Iterable[Dict]] = None):
    total = ZERO
    for category in expense_categories or []:
        total = currency.add(total, to_monthly(category.get('amount'), category.get('frequency')))
    return total


def calculate_total_monthly_savings(savings_allocation: Optional[Dict] = None):
    """
    Emergency fund contribution (only while the fund is still being built)
    plus every savings goal.
    """
    savings_allocation = savings_allocation or {}
    total = ZERO

    emergency = savings_allocation.get('emergencyFund') or {}
    if not emergency.get('hasExisting') and emergency.get('monthlyAmount'):
        total = currency.add(total, emergency['monthlyAmount'])

    for goal in savings_allocation.get('savingsGoals') or []:
        total = currency.add(total, goal.get('amount') or 0)

    return total


def calculate_monthly_income(profile: Optional[Dict]):
    sources = ((profile or {}).get('income') or {}).get('incomeSources') or []
    return convert_from_yearly(calculate_total_yearly_income(sources), Frequency.MONTHLY)


def calculate_available_for_expenses(monthly_income, monthly_savings):
    return currency.subtract(monthly_income, monthly_savings)


def check_budget_balance(profile: Optional[Dict]) -> Dict:
    """Does monthly income cover monthly expenses plus savings?"""
    profile = profile or {}
    monthly_income = calculate_monthly_income(profile)
    expenses = calculate_total_monthly_expenses((profile.get('expenses') or {}).get('expenseCategories'))
    savings = calculate_total_monthly_savings(profile.get('savingsAllocation'))
    return currency.check_budget_balance(monthly_income, expenses, savings)


def calculate_net_worth(assets: Optional[List[Dict]] = None,
                        liabilities: Optional[List[Dict]] = None) -> Dict:
    total_assets = currency.add(*[a.get('amount') or 0 for a in assets or []])
    total_liabilities = currency.add(*[l.get('amount') or 0 for l in liabilities or []])
    net_worth = currency.subtract(total_assets, total_liabilities)

    return {
        'total_assets': total_assets,
        'total_liabilities': total_liabilities,
        'net_worth': net_worth,
        'is_positive': currency.compare(net_worth, 0) >= 0,
    }


def calculate_budget_performance(profile: Optional[Dict], transactions: Iterable) -> Dict:
    """
    Planned monthly amounts from the profile against actuals from transactions.

    Positive amounts count as income, negative as expenses, and anything
    filed under a savings category as savings. Transactions in system
    categories (payments, transfers) are left out.
    """
    profile = profile or {}
    performance = {
        'income': {'planned': calculate_monthly_income(profile), 'actual': ZERO},
        'expenses': {
            'planned': calculate_total_monthly_expenses((profile.get('expenses') or {}).get('expenseCategories')),
            'actual': ZERO,
        },
        'savings': {'planned': calculate_total_monthly_savings(profile.get('savingsAllocation')), 'actual': ZERO},
    }

    for txn in transactions:
        category = txn.category
        if category is not None and category.is_system:
            continue

        if currency.is_positive(txn.amount):
            performance['income']['actual'] = currency.add(performance['income']['actual'], txn.amount)
        elif currency.compare(txn.amount, 0) < 0:
            performance['expenses']['actual'] = currency.add(
                performance['expenses']['actual'], currency.abs_amount(txn.amount))

        if category is not None and category.type == CategoryType.SAVINGS:
            performance['savings']['actual'] = currency.add(
                performance['savings']['actual'], currency.abs_amount(txn.amount))

    return performance
