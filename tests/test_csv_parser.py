"""
Tests for bank CSV parsing and column detection
"""
from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.core.csv_parser import TransactionParser, detect_columns, parse_transactions_csv

CHASE_CREDIT_CSV = """Transaction Date,Post Date,Description,Category,Type,Amount,Memo
01/30/2025,01/31/2025,WHOLE FOODS MARKET #10234,Groceries,Sale,-86.42,
01/28/2025,01/29/2025,PAYMENT THANK YOU - WEB,,Payment,"1,500.00",
1/5/25,1/6/25,STARBUCKS STORE 08812,Food & Drink,Sale,-6.85,
1/5/25,1/6/25,STARBUCKS STORE 08812,Food & Drink,Sale,-6.85,
,,,,,,
"""


@pytest.fixture
def chase_csv(tmp_path):
    path = tmp_path / 'Chase_Activity.csv'
    path.write_text(CHASE_CREDIT_CSV, encoding='utf-8-sig')
    return path


class TestDetectColumns:
    def test_chase_checking(self):
        headers = ['Details', 'Posting Date', 'Description', 'Amount', 'Type', 'Balance', 'Check or Slip #']
        assert detect_columns(headers) == {'date': 'Posting Date', 'description': 'Description', 'amount': 'Amount'}

    def test_chase_credit(self):
        headers = ['Transaction Date', 'Post Date', 'Description', 'Category', 'Type', 'Amount', 'Memo']
        assert detect_columns(headers) == {'date': 'Transaction Date', 'description': 'Description', 'amount': 'Amount'}

    def test_generic_export(self):
        assert detect_columns(['Date', 'Payee', 'Debit']) == {'date': 'Date', 'description': 'Payee', 'amount': 'Debit'}

    def test_unknown_headers(self):
        assert detect_columns(['Foo', 'Bar']) == {'date': None, 'description': None, 'amount': None}


class TestParseValues:
    @pytest.mark.parametrize('text,expected', [
        ('01/30/2025', date(2025, 1, 30)),
        ('1/5/25', date(2025, 1, 5)),
        ('2025-01-30', date(2025, 1, 30)),
        ('2025/01/30', date(2025, 1, 30)),
        (' 01/30/2025 ', date(2025, 1, 30)),
    ])
    def test_parse_date(self, text, expected):
        assert TransactionParser().parse_date(text) == expected

    @pytest.mark.parametrize('text', ['', '13/45/2025', 'yesterday'])
    def test_parse_date_rejects(self, text):
        with pytest.raises(ValueError):
            TransactionParser().parse_date(text)

    @pytest.mark.parametrize('text,expected', [
        ('-86.42', '-86.42'),
        ('$1,500.00', '1500.00'),
        ('(12.00)', '-12.00'),
        ('3.456', '3.46'),
        ('', '0.00'),
    ])
    def test_parse_amount(self, text, expected):
        assert TransactionParser().parse_amount(text) == Decimal(expected)

    def test_parse_amount_rejects(self):
        with pytest.raises(ValueError):
            TransactionParser().parse_amount('twelve')


class TestParseFile:
    def test_parses_rows_in_order(self, chase_csv):
        transactions = parse_transactions_csv(chase_csv)

        assert [t.description for t in transactions] == [
            'WHOLE FOODS MARKET #10234',
            'PAYMENT THANK YOU - WEB',
            'STARBUCKS STORE 08812',
            'STARBUCKS STORE 08812',
        ]
        assert transactions[0].date == date(2025, 1, 30)
        assert transactions[0].amount == Decimal('-86.42')
        assert transactions[1].amount == Decimal('1500.00')
        assert all(t.category is None and t.needs_review for t in transactions)

    def test_ids_are_stable_and_unique(self, chase_csv):
        first = [t.id for t in parse_transactions_csv(chase_csv)]
        second = [t.id for t in parse_transactions_csv(chase_csv)]
        assert first == second
        assert len(set(first)) == len(first)
        assert all(len(txn_id) == 16 for txn_id in first)

    def test_explicit_column_mapping(self, tmp_path):
        path = tmp_path / 'bank.csv'
        path.write_text("When,What,HowMuch\n2025-02-01,NETFLIX.COM,-15.49\n", encoding='utf-8')

        transactions = parse_transactions_csv(path, {'date': 'When', 'description': 'What', 'amount': 'HowMuch'})

        assert len(transactions) == 1
        assert transactions[0].description == 'NETFLIX.COM'
        assert transactions[0].amount == Decimal('-15.49')

    def test_missing_columns(self, tmp_path):
        path = tmp_path / 'bad.csv'
        path.write_text("Foo,Bar\n1,2\n", encoding='utf-8')
        with pytest.raises(ValueError, match='Could not find columns'):
            parse_transactions_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match='File not found'):
            parse_transactions_csv(tmp_path / 'nope.csv')
