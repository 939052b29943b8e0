"""
CSV Parser for Bank Exports

Reads any bank CSV with a header row. Date, description and amount
columns are detected from the header names (Chase checking and credit
exports work without a mapping), or can be given explicitly.
"""
import csv
import hashlib
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from pathlib import Path
from typing import Dict, List, Optional

from .currency import CENT
from .models import Transaction

# Checked in priority order, first pattern found in any header wins
COLUMN_PATTERNS = {
    'date': ['transaction date', 'trans date', 'date', 'posted'],
    'description': ['description', 'merchant', 'payee', 'details', 'name'],
    'amount': ['transaction amount', 'amount', 'value', 'debit', 'charge'],
}

DATE_FORMATS = [
    '%m/%d/%Y',  # 01/30/2025 or 1/30/2025
    '%m/%d/%y',  # 1/30/23
    '%Y-%m-%d',  # 2025-01-30
    '%Y/%m/%d',  # 2025/01/30
]


def detect_columns(headers: List[str]) -> Dict[str, Optional[str]]:
    """
    Guess which headers hold the date, description and amount.

    Returns:
        Dict with 'date', 'description', 'amount' keys; a value is None when
        no header matched
    """
    mapping = {}
    for field, patterns in COLUMN_PATTERNS.items():
        mapping[field] = None
        for pattern in patterns:
            match = next((h for h in headers if pattern in h.lower().strip()
                          and h not in mapping.values()), None)
            if match:
                mapping[field] = match
                break
    return mapping


class TransactionParser:
    """Parses a bank CSV into Transaction records"""

    def __init__(self, column_mapping: Optional[Dict[str, str]] = None):
        self.column_mapping = column_mapping

    def compute_row_hash(self, txn_date: str, description: str, amount: str, row_index: int = 0) -> str:
        """
        Deterministic id for a row, used to skip re-imported transactions.
        The row index keeps identical same-day purchases apart.
        """
        hash_input = f"{txn_date}|{description}|{amount}|{row_index}"
        return hashlib.sha256(hash_input.encode()).hexdigest()[:16]

    def parse_date(self, date_str: str) -> date:
        """Parse a date string in any of the supported formats"""
        date_str = (date_str or '').strip()
        if not date_str:
            raise ValueError("Missing date")

        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(date_str, fmt).date()
            except ValueError:
                continue

        raise ValueError(f"Could not parse date: {date_str}")

    def parse_amount(self, amount_str: str) -> Decimal:
        """Parse amount string to Decimal ("$1,234.50", "(12.00)" and "" accepted)"""
        if not amount_str or not amount_str.strip():
            return Decimal('0.00')

        cleaned = amount_str.replace('$', '').replace(',', '').strip()
        negative = cleaned.startswith('(') and cleaned.endswith(')')
        if negative:
            cleaned = cleaned[1:-1]

        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            raise ValueError(f"Could not parse amount: {amount_str}")

        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        return -amount if negative else amount

    def parse(self, csv_path: Path) -> List[Transaction]:
        """
        Parse a CSV file

        Args:
            csv_path: Path to CSV file

        Returns:
            List of uncategorized Transaction objects in file order
        """
        transactions = []

        with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)
            headers = reader.fieldnames or []

            mapping = self.column_mapping or detect_columns(headers)
            missing = [k for k in ('date', 'description', 'amount') if not mapping.get(k)]
            if missing:
                raise ValueError(f"Could not find columns for: {', '.join(missing)}. Headers: {headers}")

            for i, row in enumerate(reader):
                description = (row.get(mapping['description']) or '').strip()
                raw_date = row.get(mapping['date']) or ''
                raw_amount = row.get(mapping['amount']) or ''

                # Skip blank trailer rows some banks append
                if not description and not raw_date.strip():
                    continue

                txn_date = self.parse_date(raw_date)
                amount = self.parse_amount(raw_amount)

                transactions.append(Transaction(
                    id=self.compute_row_hash(txn_date.isoformat(), description, str(amount), row_index=i),
                    date=txn_date,
                    description=description,
                    amount=amount,
                ))

        print(f"✅ Parsed {len(transactions)} transactions from {Path(csv_path).name}")
        return transactions


def parse_transactions_csv(csv_path, column_mapping: Optional[Dict[str, str]] = None) -> List[Transaction]:
    """
    Parse a bank CSV file

    Args:
        csv_path: Path to CSV file
        column_mapping: Optional {'date': ..., 'description': ..., 'amount': ...}
            header names; detected from the header row when omitted

    Returns:
        List of parsed transactions
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise ValueError(f"File not found: {csv_path}")

    return TransactionParser(column_mapping).parse(csv_path)
