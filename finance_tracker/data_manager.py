"""
Data Manager

Loads and saves the user profile, transactions and categories under
fixed storage keys. Two backends share the same key/value interface:
- JsonFileStorage: one JSON file per key in a local data directory
- PostgresStorage: a kv_store table (see finance-init-db)

Load failures fall back to empty defaults and save failures return
False, so callers never have to handle storage exceptions.
"""
import json
import os
import uuid
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from psycopg2.extras import Json

from finance_tracker.core.budget_calculations import calculate_net_worth, calculate_total_monthly_savings
from finance_tracker.core.category_enhancer import IGNORE_CATEGORY_ID, apply_manual_categorization, create_ignore_category
from finance_tracker.core.category_suggestions import build_default_categories, merge_custom_categories
from finance_tracker.core.currency import ZERO, subtract, to_amount
from finance_tracker.core.income_aggregator import calculate_total_yearly_income, convert_from_yearly
from finance_tracker.core.models import Category, Frequency, IncomeSource, Transaction
from finance_tracker.utils import config
from finance_tracker.utils.db_connection import get_db_connection

STORAGE_KEYS = {
    'USER_DATA': 'financeTracker_userData',
    'TRANSACTIONS': 'financeTracker_transactions',
    'CATEGORIES': 'financeTracker_categories',
    'NET_WORTH_ITEMS': 'financeTracker_netWorthItems',
    'MERCHANT_MAPPINGS': 'merchantMappings',
    'CATEGORY_MAPPINGS': 'tally_categoryMappings',
    'APP_VERSION': 'financeTracker_version',
}

CUSTOM_CATEGORY_CONTEXTS = ['expenses', 'savings', 'income', 'assets', 'liabilities']

CURRENT_VERSION = '1.0.0'

SAMPLE_TRANSACTIONS = [
    ('2025-01-03', 'PAYROLL DIRECT DEPOSIT ACME CORP', '3200.00'),
    ('2025-01-04', 'WHOLE FOODS MARKET #10234', '-86.42'),
    ('2025-01-06', 'SHELL OIL 57444', '-41.10'),
    ('2025-01-08', 'NETFLIX.COM', '-15.49'),
    ('2025-01-10', 'AMAZON.COM*AB12CD', '-132.75'),
    ('2025-01-12', 'STARBUCKS STORE 08812', '-6.85'),
    ('2025-01-15', 'PAYMENT THANK YOU - WEB', '-500.00'),
]


def custom_categories_key(context: str) -> str:
    return f"customCategories_{context}"


class JsonFileStorage:
    """Stores each key as <data_dir>/<key>.json"""

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir else config.get_data_dir()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def set(self, key: str, value: Any):
        # Atomic write via .tmp + os.replace()
        path = self._path(key)
        tmp = path.with_suffix('.tmp')
        try:
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        finally:
            tmp.unlink(missing_ok=True)

    def remove(self, key: str):
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> List[str]:
        return sorted(p.stem for p in self.data_dir.glob('*.json'))


class PostgresStorage:
    """Stores each key as a JSONB row in the kv_store table"""

    def __init__(self, conn=None):
        self.conn = conn or get_db_connection()

    def get(self, key: str) -> Optional[Any]:
        cursor = self.conn.cursor()
        try:
            cursor.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
            row = cursor.fetchone()
            return row[0] if row else None
        finally:
            cursor.close()

    def set(self, key: str, value: Any):
        cursor = self.conn.cursor()
        try:
            cursor.execute("""
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (%s, %s, NOW())
                ON CONFLICT (key) DO UPDATE
                SET value = EXCLUDED.value, updated_at = NOW()
            """, (key, Json(value)))
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        finally:
            cursor.close()

    def remove(self, key: str):
        cursor = self.conn.cursor()
        try:
            cursor.execute("DELETE FROM kv_store WHERE key = %s", (key,))
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        finally:
            cursor.close()

    def keys(self) -> List[str]:
        cursor = self.conn.cursor()
        try:
            cursor.execute("SELECT key FROM kv_store ORDER BY key")
            return [row[0] for row in cursor.fetchall()]
        finally:
            cursor.close()

    def close(self):
        self.conn.close()


def create_storage(backend: Optional[str] = None, data_dir: Optional[Path] = None):
    """Build the storage backend named by STORAGE_BACKEND (or the argument)"""
    backend = backend or config.get_storage_backend()
    if backend == 'json':
        return JsonFileStorage(data_dir)
    if backend == 'postgres':
        return PostgresStorage()
    raise ValueError(f"Unknown storage backend: {backend}")


def _now() -> str:
    return datetime.now().isoformat()


class DataManager:
    """
    Persistence for the profile, transactions and categories
    """

    def __init__(self, storage=None):
        self.storage = storage or create_storage()
        self.current_version = CURRENT_VERSION

        if self._get(STORAGE_KEYS['APP_VERSION']) is None:
            self._set(STORAGE_KEYS['APP_VERSION'], self.current_version)

    # ==================== STORAGE HELPERS ====================

    def _get(self, key: str, default=None):
        try:
            value = self.storage.get(key)
        except Exception as e:
            print(f"⚠️  Failed to load {key}: {e}")
            return default
        return default if value is None else value

    def _set(self, key: str, value) -> bool:
        try:
            self.storage.set(key, value)
            return True
        except Exception as e:
            print(f"❌ Failed to save {key}: {e}")
            return False

    def _remove(self, key: str):
        try:
            self.storage.remove(key)
        except Exception as e:
            print(f"⚠️  Failed to remove {key}: {e}")

    # ==================== USER DATA ====================

    def save_user_data(self, data: Dict) -> bool:
        user_data = dict(data, lastUpdated=_now(), version=self.current_version)
        return self._set(STORAGE_KEYS['USER_DATA'], user_data)

    def load_user_data(self) -> Optional[Dict]:
        return self._get(STORAGE_KEYS['USER_DATA'])

    def clear_user_data(self):
        """Remove the profile and everything learned from it"""
        self._remove(STORAGE_KEYS['USER_DATA'])
        self._remove(STORAGE_KEYS['CATEGORIES'])
        self._remove(STORAGE_KEYS['MERCHANT_MAPPINGS'])
        self._remove(STORAGE_KEYS['CATEGORY_MAPPINGS'])
        for context in CUSTOM_CATEGORY_CONTEXTS:
            self._remove(custom_categories_key(context))

    def get_income_sources(self) -> List[IncomeSource]:
        user_data = self.load_user_data() or {}
        sources = (user_data.get('income') or {}).get('incomeSources') or []
        return [IncomeSource.from_dict(s) for s in sources]

    def is_onboarding_complete(self) -> bool:
        user_data = self.load_user_data()
        return bool(user_data) and user_data.get('onboardingComplete') is True

    def get_monthly_budget(self):
        """Monthly income left for expenses after planned savings"""
        user_data = self.load_user_data()
        if not user_data:
            return ZERO

        monthly_income = convert_from_yearly(
            calculate_total_yearly_income(self.get_income_sources()), Frequency.MONTHLY)
        monthly_savings = calculate_total_monthly_savings(user_data.get('savingsAllocation'))
        return subtract(monthly_income, monthly_savings)

    def load_net_worth(self) -> Dict:
        net_worth = (self.load_user_data() or {}).get('netWorth') or {}
        return calculate_net_worth(net_worth.get('assets'), net_worth.get('liabilities'))

    # ==================== TRANSACTIONS ====================

    def save_transactions(self, transactions: List[Transaction]) -> bool:
        saved = self._set(STORAGE_KEYS['TRANSACTIONS'], {
            'transactions': [t.to_dict() for t in transactions],
            'lastUpdated': _now(),
            'count': len(transactions),
        })
        if saved:
            print(f"💾 {len(transactions)} transactions saved")
        return saved

    def load_transactions(self) -> List[Transaction]:
        data = self._get(STORAGE_KEYS['TRANSACTIONS'], {})
        try:
            return [Transaction.from_dict(t) for t in data.get('transactions', [])]
        except (KeyError, TypeError, AttributeError) as e:
            print(f"⚠️  Failed to read stored transactions: {e}")
            return []

    def add_transaction(self, transaction: Transaction) -> Transaction:
        if not transaction.id:
            transaction = replace(transaction, id=uuid.uuid4().hex)
        transactions = self.load_transactions()
        transactions.append(transaction)
        self.save_transactions(transactions)
        return transaction

    def add_transactions(self, new_transactions: List[Transaction]) -> Dict[str, int]:
        """
        Append imported transactions, skipping ids already stored.

        Returns:
            Dict with 'inserted' and 'duplicates' counts
        """
        transactions = self.load_transactions()
        existing_ids = {t.id for t in transactions}

        inserted = duplicates = 0
        for txn in new_transactions:
            if txn.id and txn.id in existing_ids:
                duplicates += 1
                continue
            if not txn.id:
                txn = replace(txn, id=uuid.uuid4().hex)
            transactions.append(txn)
            existing_ids.add(txn.id)
            inserted += 1

        self.save_transactions(transactions)
        return {'inserted': inserted, 'duplicates': duplicates}

    def update_transaction(self, transaction_id: str, **updates) -> Optional[Transaction]:
        transactions = self.load_transactions()
        for index, txn in enumerate(transactions):
            if txn.id == transaction_id:
                transactions[index] = replace(txn, **updates)
                self.save_transactions(transactions)
                return transactions[index]
        return None

    def delete_transaction(self, transaction_id: str) -> bool:
        transactions = self.load_transactions()
        remaining = [t for t in transactions if t.id != transaction_id]
        if len(remaining) == len(transactions):
            return False
        self.save_transactions(remaining)
        return True

    def replace_with_split(self, transaction_id: str, children: List[Transaction]) -> bool:
        """Swap a transaction for its split parts, keeping list position"""
        transactions = self.load_transactions()
        for index, txn in enumerate(transactions):
            if txn.id == transaction_id:
                transactions[index:index + 1] = children
                return self.save_transactions(transactions)
        return False

    def assign_category(self, transaction_id: str, category_id: str) -> Optional[Transaction]:
        """
        Manually categorize a transaction and learn its merchant.

        The transaction is confirmed at full confidence and the category
        remembers the normalized merchant for future imports.
        """
        categories = self.load_categories()
        category = next((c for c in categories if c.id == category_id), None)
        if category is None and category_id == IGNORE_CATEGORY_ID:
            category = create_ignore_category()
        if category is None:
            print(f"⚠️  Unknown category: {category_id}")
            return None

        transactions = self.load_transactions()
        txn = next((t for t in transactions if t.id == transaction_id), None)
        if txn is None:
            return None

        if not category.is_system and txn.description:
            categories = apply_manual_categorization(categories, category_id, txn.description)
            category = next(c for c in categories if c.id == category_id)
            self.save_categories(categories)

        return self.update_transaction(
            transaction_id, category=category, confidence=1.0, needs_review=False, confirmed=True)

    def seed_sample_transactions(self) -> int:
        """Add demo transactions flagged as samples"""
        samples = [
            Transaction(
                id=f"sample-{index}",
                date=date.fromisoformat(day),
                description=description,
                amount=to_amount(amount),
                sample=True,
            )
            for index, (day, description, amount) in enumerate(SAMPLE_TRANSACTIONS, start=1)
        ]
        return self.add_transactions(samples)['inserted']

    def clear_sample_transactions(self) -> int:
        transactions = self.load_transactions()
        remaining = [t for t in transactions if not t.sample]
        self.save_transactions(remaining)
        return len(transactions) - len(remaining)

    # ==================== CATEGORIES ====================

    def save_categories(self, categories: List[Category]) -> bool:
        return self._set(STORAGE_KEYS['CATEGORIES'], [c.to_dict() for c in categories])

    def load_categories(self) -> List[Category]:
        """Stored categories, or the default seed set on first use"""
        stored = self._get(STORAGE_KEYS['CATEGORIES'])
        if not stored:
            return build_default_categories()
        try:
            return [Category.from_dict(c) for c in stored]
        except (KeyError, TypeError, AttributeError) as e:
            print(f"⚠️  Failed to read stored categories: {e}")
            return build_default_categories()

    def add_category(self, category: Category) -> bool:
        categories = self.load_categories()
        if any(c.id == category.id for c in categories):
            print(f"⚠️  Category id already exists: {category.id}")
            return False
        categories.append(category)
        return self.save_categories(categories)

    def save_custom_category(self, context: str, name: str, frequency: Optional[str] = None) -> bool:
        """Remember a user-entered category name for a context"""
        key = custom_categories_key(context)
        existing = self._get(key, [])
        if any(c.get('name', '').lower() == name.lower() for c in existing):
            return False
        existing.append({'name': name, 'frequency': frequency, 'custom': True})
        return self._set(key, existing)

    def load_categories_with_custom(self, context: str) -> List[Dict]:
        return merge_custom_categories(context, self._get(custom_categories_key(context), []))

    # ==================== IMPORT / EXPORT ====================

    def export_data(self) -> Dict:
        return {
            'userData': self.load_user_data(),
            'transactions': [t.to_dict() for t in self.load_transactions()],
            'categories': [c.to_dict() for c in self.load_categories()],
            'exportedAt': _now(),
            'version': self.current_version,
        }

    def import_data(self, data: Dict) -> bool:
        try:
            if data.get('userData'):
                self.save_user_data(data['userData'])
            if data.get('transactions'):
                self.save_transactions([Transaction.from_dict(t) for t in data['transactions']])
            if data.get('categories'):
                self.save_categories([Category.from_dict(c) for c in data['categories']])
            return True
        except (KeyError, TypeError, AttributeError) as e:
            print(f"❌ Failed to import data: {e}")
            return False

    def reset_all_data(self) -> bool:
        for key in STORAGE_KEYS.values():
            self._remove(key)
        for context in CUSTOM_CATEGORY_CONTEXTS:
            self._remove(custom_categories_key(context))
        print("🗑️  All application data cleared")
        return True
