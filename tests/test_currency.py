"""
Tests for cent-exact currency helpers
"""
from decimal import Decimal

import pytest

from finance_tracker.core import currency


@pytest.mark.parametrize('value,expected', [
    ('$1,234.567', '1234.57'),
    ('12.345', '12.35'),
    (0.1, '0.10'),
    (Decimal('7'), '7.00'),
    (-3, '-3.00'),
    ('abc', '0.00'),
    ('NaN', '0.00'),
    ('', '0.00'),
    (None, '0.00'),
    (True, '0.00'),
])
def test_to_amount(value, expected):
    assert currency.to_amount(value) == Decimal(expected)


def test_cents_round_trip():
    assert currency.to_cents('12.34') == 1234
    assert currency.from_cents(1234) == Decimal('12.34')
    assert currency.to_cents('-0.05') == -5


def test_arithmetic_is_exact():
    assert currency.add(0.1, 0.2) == Decimal('0.30')
    assert currency.add() == Decimal('0.00')
    assert currency.subtract(10, '3.33', '3.33') == Decimal('3.34')
    assert currency.multiply('19.99', 3) == Decimal('59.97')
    assert currency.divide(100, 3) == Decimal('33.33')


def test_divide_by_zero():
    assert currency.divide(5, 0) == Decimal('0.00')


def test_comparisons():
    assert currency.compare('1.00', 2) == -1
    assert currency.compare('2.001', 2) == 0
    assert currency.compare(3, '2.99') == 1
    assert currency.is_equal(0.1 + 0.2, '0.30')
    assert currency.is_positive('0.01')
    assert not currency.is_positive('0.00')
    assert currency.abs_amount('-4.20') == Decimal('4.20')


@pytest.mark.parametrize('amount,kwargs,expected', [
    (-1234.5, {}, '-$1,234.50'),
    (0, {}, '$0.00'),
    (1234.5, {'show_cents': False}, '$1,235'),
    ('99.9', {'symbol': '€'}, '€99.90'),
])
def test_format_currency(amount, kwargs, expected):
    assert currency.format_currency(amount, **kwargs) == expected


@pytest.mark.parametrize('text,expected', [
    ('$1,2a3.456', '123.45'),
    ('1.2.3', '1.23'),
    ('', ''),
    (None, ''),
])
def test_parse_currency_input(text, expected):
    assert currency.parse_currency_input(text) == expected


@pytest.mark.parametrize('value,expected', [
    ('12.50', (True, None)),
    (0, (True, None)),
    ('$1,000', (True, None)),
    ('', (False, 'Amount is required')),
    ('twelve', (False, 'Please enter a valid amount')),
    ('inf', (False, 'Please enter a valid amount')),
    ('-1', (False, 'Amount cannot be negative')),
    (1000000000, (False, 'Amount is too large')),
])
def test_validate_currency_input(value, expected):
    assert currency.validate_currency_input(value) == expected


class TestCheckBudgetBalance:
    def test_balanced(self):
        result = currency.check_budget_balance(5000, 3000, 2000)
        assert result['is_balanced']
        assert result['remaining'] == Decimal('0.00')

    def test_one_cent_is_still_balanced(self):
        result = currency.check_budget_balance(5000, 3000, '1999.99')
        assert result['is_balanced']
        assert result['is_under_budget']

    def test_over_budget(self):
        result = currency.check_budget_balance(5000, 4000, 2000)
        assert result['is_over_budget']
        assert not result['is_balanced']
        assert result['difference'] == Decimal('1000.00')
        assert result['remaining'] == Decimal('-1000.00')


@pytest.mark.parametrize('value', ['1e30', Decimal('1E+26'), '9' * 40])
def test_to_amount_beyond_decimal_precision(value):
    assert currency.to_amount(value) == Decimal('0.00')
