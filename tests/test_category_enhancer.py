"""
Tests for keyword generation, auto-ignore and learned merchant mappings
"""
import pytest

from finance_tracker.core.category_enhancer import (
    CATEGORY_KEYWORD_PATTERNS,
    IGNORE_CATEGORY_ID,
    apply_manual_categorization,
    create_ignore_category,
    enhance_categories,
    enhance_category,
    generate_category_keywords,
    learn_merchant_mapping,
    should_auto_ignore,
)
from finance_tracker.core.models import Category, CategoryType


def test_keywords_from_known_pattern():
    cat = Category(id='expense-groceries', name='Groceries', type=CategoryType.EXPENSE)
    assert generate_category_keywords(cat) == ['groceries'] + CATEGORY_KEYWORD_PATTERNS['groceries']


def test_keywords_include_name_parts():
    cat = Category(id='expense-dining-out', name='Dining Out', type=CategoryType.EXPENSE)
    keywords = generate_category_keywords(cat)
    assert keywords[0] == 'dining out'
    assert 'restaurant' in keywords
    assert 'dining' in keywords
    assert 'out' in keywords
    assert len(keywords) == len(set(keywords))


def test_income_categories_get_income_keywords():
    cat = Category(id='income-salary', name='Salary', type=CategoryType.INCOME)
    assert generate_category_keywords(cat) == ['salary', 'payroll', 'deposit', 'direct deposit']


def test_keywords_for_missing_category():
    assert generate_category_keywords(None) == []
    assert generate_category_keywords(Category(id='x', name='', type=CategoryType.EXPENSE)) == []


def test_ignore_category():
    ignore = create_ignore_category()
    assert ignore.id == IGNORE_CATEGORY_ID
    assert ignore.type == CategoryType.SYSTEM
    assert ignore.is_system
    assert 'transfer' in ignore.keywords


@pytest.mark.parametrize('description,expected', [
    ('PAYMENT THANK YOU - WEB', True),
    ('Online Transfer to SAV ...4821', True),
    ('ZELLE TO JANE DOE', True),
    ('VENMO CASHOUT', True),
    ('WHOLE FOODS MARKET', False),
    ('', False),
])
def test_should_auto_ignore(make_txn, description, expected):
    assert should_auto_ignore(make_txn(description)) is expected


def test_should_auto_ignore_without_transaction():
    assert not should_auto_ignore(None)


def test_enhance_keeps_existing_keywords(groceries):
    assert enhance_category(groceries) is groceries


def test_enhance_fills_missing_keywords():
    bare = Category(id='expense-gym', name='Gym', type=CategoryType.EXPENSE)
    enhanced = enhance_category(bare)
    assert enhanced.keywords[0] == 'gym'
    assert 'fitness' in enhanced.keywords
    assert bare.keywords == []


def test_enhance_categories_appends_single_ignore(groceries):
    enhanced = enhance_categories([groceries, create_ignore_category()])
    assert [c.id for c in enhanced] == ['expense-groceries', IGNORE_CATEGORY_ID]


def test_enhance_categories_empty():
    assert [c.id for c in enhance_categories(None)] == [IGNORE_CATEGORY_ID]


def test_learn_merchant_mapping_returns_copy(groceries):
    learned = learn_merchant_mapping(groceries, 'CORNER DELI #552')
    assert learned.merchant_mappings == {'corner deli': 'expense-groceries'}
    assert groceries.merchant_mappings == {}


def test_learn_merchant_mapping_skips_system_and_empty(groceries):
    ignore = create_ignore_category()
    assert learn_merchant_mapping(ignore, 'ZELLE TO JANE') is ignore
    assert learn_merchant_mapping(groceries, '') is groceries


def test_manual_categorization_moves_mapping(groceries, dining):
    categories = apply_manual_categorization([groceries, dining], groceries.id, 'CORNER DELI #552')
    categories = apply_manual_categorization(categories, dining.id, 'CORNER DELI #99')

    assert categories[0].merchant_mappings == {}
    assert categories[1].merchant_mappings == {'corner deli': dining.id}
