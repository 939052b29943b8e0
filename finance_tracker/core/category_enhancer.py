"""
Category Enhancer

Gives categories the hints the matcher needs:
- Keyword lists derived from the category name and type
- Per-category merchant mappings learned from manual categorization
- The system "Ignore" category for payments and transfers
"""
import re
from dataclasses import replace
from typing import List, Optional

from .merchant_normalizer import is_credit_card_payment, normalize_merchant_name
from .models import Category, CategoryType

IGNORE_CATEGORY_ID = 'system-ignore'

# Keyword sets for common category names
CATEGORY_KEYWORD_PATTERNS = {
    # Food & Dining
    'groceries': ['grocery', 'supermarket', 'market', 'food', 'whole foods', 'trader joe',
                  'safeway', 'kroger', 'walmart', 'target', 'costco'],
    'dining': ['restaurant', 'cafe', 'coffee', 'pizza', 'burger', 'starbucks', 'mcdonald',
               'chipotle', 'subway', 'takeout', 'delivery'],
    'fast food': ['mcdonald', 'burger king', 'wendy', 'taco bell', 'kfc', 'subway',
                  'pizza hut', 'domino', 'quick service'],

    # Transportation
    'gas': ['gas', 'fuel', 'station', 'shell', 'chevron', 'exxon', 'mobil', 'bp', 'arco', 'petroleum'],
    'parking': ['parking', 'meter', 'garage', 'lot', 'valet'],
    'uber': ['uber', 'lyft', 'rideshare', 'taxi', 'cab'],
    'public transport': ['metro', 'bus', 'train', 'transit', 'subway', 'mta', 'bart'],

    # Shopping
    'clothing': ['clothing', 'apparel', 'fashion', 'nike', 'adidas', 'gap', 'zara', 'h&m',
                 'uniqlo', 'nordstrom', 'macy'],
    'amazon': ['amazon', 'amzn', 'aws'],
    'electronics': ['best buy', 'apple', 'microsoft', 'electronics', 'computer', 'phone', 'tech'],

    # Utilities & Services
    'utilities': ['electric', 'power', 'gas company', 'water', 'sewer', 'utility', 'pge', 'edison'],
    'internet': ['internet', 'wifi', 'comcast', 'xfinity', 'verizon', 'att', 'spectrum', 'cox'],
    'phone': ['phone', 'mobile', 'cellular', 'verizon', 'att', 't-mobile', 'sprint'],
    'streaming': ['netflix', 'spotify', 'hulu', 'disney', 'amazon prime', 'youtube', 'apple music'],

    # Health & Fitness
    'gym': ['gym', 'fitness', 'planet fitness', 'la fitness', 'crossfit', 'yoga', 'pilates'],
    'medical': ['medical', 'doctor', 'hospital', 'pharmacy', 'cvs', 'walgreens', 'urgent care'],
    'dental': ['dental', 'dentist', 'orthodontist'],

    # Financial
    'bank': ['bank', 'atm', 'fee', 'maintenance', 'overdraft'],
    'insurance': ['insurance', 'premium', 'policy', 'allstate', 'geico', 'progressive', 'state farm'],

    # Housing
    'rent': ['rent', 'rental', 'lease', 'apartment', 'housing'],
    'mortgage': ['mortgage', 'loan payment', 'principal', 'interest'],
    'home improvement': ['home depot', 'lowes', 'hardware', 'improvement', 'repair'],

    # Entertainment
    'movies': ['movie', 'cinema', 'theater', 'amc', 'regal', 'film'],
    'entertainment': ['entertainment', 'concert', 'show', 'event', 'ticket'],
}

INCOME_KEYWORDS = ['salary', 'payroll', 'deposit', 'direct deposit']

IGNORE_KEYWORDS = [
    'payment thank you', 'autopay', 'online payment',
    'credit card payment', 'transfer', 'balance payment',
]

AUTO_IGNORE_PATTERNS = [
    'transfer',
    'zelle',
    'venmo',
    'paypal transfer',
    'internal transfer',
    'account transfer',
    'balance transfer',
]


def generate_category_keywords(category: Optional[Category]) -> List[str]:
    """
    Build the keyword list for a category from its name and type.

    Order is stable: the name itself, pattern keywords, name parts,
    then income keywords. Duplicates are dropped.
    """
    if category is None or not category.name:
        return []

    category_name = category.name.lower()
    keywords = {category_name: None}

    for pattern, pattern_keywords in CATEGORY_KEYWORD_PATTERNS.items():
        if pattern in category_name or category_name in pattern:
            for keyword in pattern_keywords:
                keywords.setdefault(keyword, None)

    for part in re.split(r'[\s&-]+', category_name):
        if len(part) > 2:
            keywords.setdefault(part, None)

    if category.type == CategoryType.INCOME:
        for keyword in INCOME_KEYWORDS:
            keywords.setdefault(keyword, None)

    return list(keywords)


def create_ignore_category() -> Category:
    """The system category for card payments, transfers and other noise"""
    return Category(
        id=IGNORE_CATEGORY_ID,
        name='Ignore',
        type=CategoryType.SYSTEM,
        keywords=list(IGNORE_KEYWORDS),
        is_system=True,
    )


def should_auto_ignore(transaction) -> bool:
    """True for card payments and account-to-account transfers"""
    if transaction is None or not transaction.description:
        return False

    if is_credit_card_payment(transaction.description):
        return True

    description = transaction.description.lower()
    return any(pattern in description for pattern in AUTO_IGNORE_PATTERNS)


def enhance_category(category: Optional[Category]) -> Optional[Category]:
    """Return a copy with generated keywords unless it already has some"""
    if category is None or category.keywords:
        return category
    return replace(category, keywords=generate_category_keywords(category))


def enhance_categories(categories: Optional[List[Category]]) -> List[Category]:
    """Enhance every category and append the system Ignore category"""
    if not categories:
        categories = []

    enhanced = [enhance_category(c) for c in categories if c.id != IGNORE_CATEGORY_ID]
    enhanced.append(create_ignore_category())
    return enhanced


def learn_merchant_mapping(category: Category, description: str) -> Category:
    """
    Remember that this merchant belongs to the category.

    Returns:
        A copy of the category with the normalized merchant mapped to it.
        System categories and empty merchants are returned unchanged.
    """
    merchant = normalize_merchant_name(description)
    if not merchant or category.is_system:
        return category

    mappings = dict(category.merchant_mappings)
    mappings[merchant] = category.id
    return replace(category, merchant_mappings=mappings)


def apply_manual_categorization(categories: List[Category], category_id: str,
                                description: str) -> List[Category]:
    """
    Learn a mapping for one category and forget it everywhere else.

    Keeps each merchant mapped to at most one category so an exact match
    cannot be shadowed by an older mapping in an earlier category.
    """
    merchant = normalize_merchant_name(description)
    updated = []
    for category in categories:
        if category.id == category_id:
            updated.append(learn_merchant_mapping(category, description))
        elif merchant in category.merchant_mappings:
            mappings = dict(category.merchant_mappings)
            del mappings[merchant]
            updated.append(replace(category, merchant_mappings=mappings))
        else:
            updated.append(category)
    return updated
