"""
Category Suggestions

The seed category set offered during onboarding, grouped by context
(expenses, savings, income). Each entry carries matching keywords and the
frequencies people usually budget it at.
"""
import re
from typing import Dict, List

from .models import Category, CategoryType

EXPENSE_SUGGESTIONS = [
    {
        'name': 'Gifts',
        'keywords': ['birthday', 'birthday gift', 'christmas', 'christmas gift', 'holiday gift',
                     'valentines', 'mothers day', 'fathers day', 'anniversary', 'wedding gift',
                     'present', 'presents', 'gift giving'],
        'hint': 'Track individual recipients in Gift Management',
        'common_frequencies': ['Monthly', 'Yearly'],
    },
    {
        'name': 'Housing',
        'keywords': ['rent', 'mortgage', 'property tax', 'home', 'apartment'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Groceries',
        'keywords': ['food', 'grocery', 'supermarket', 'food shopping'],
        'common_frequencies': ['Weekly', 'Bi-weekly', 'Monthly'],
    },
    {
        'name': 'Transportation',
        'keywords': ['gas', 'fuel', 'transit', 'uber', 'lyft', 'car', 'parking', 'metro', 'bus'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Insurance',
        'keywords': ['insurance', 'health insurance', 'car insurance', 'life insurance'],
        'common_frequencies': ['Monthly', 'Yearly'],
    },
    {
        'name': 'Utilities',
        'keywords': ['electric', 'gas', 'water', 'internet', 'cable', 'phone', 'utilities'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Dining Out',
        'keywords': ['restaurant', 'restaurants', 'eating out', 'takeout', 'delivery', 'coffee'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Entertainment',
        'keywords': ['netflix', 'spotify', 'movies', 'streaming', 'games', 'subscription'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Healthcare',
        'keywords': ['doctor', 'medical', 'prescription', 'dentist', 'health'],
        'common_frequencies': ['Monthly', 'One-time'],
    },
    {
        'name': 'Personal Care',
        'keywords': ['haircut', 'salon', 'gym', 'fitness', 'beauty'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Clothing',
        'keywords': ['clothes', 'apparel', 'shoes', 'wardrobe'],
        'common_frequencies': ['Monthly', 'Yearly'],
    },
    {
        'name': 'Education',
        'keywords': ['tuition', 'books', 'courses', 'training', 'school'],
        'common_frequencies': ['Yearly', 'One-time'],
    },
    {
        'name': 'Subscriptions',
        'keywords': ['subscription', 'membership', 'service'],
        'common_frequencies': ['Monthly', 'Yearly'],
    },
    {
        'name': 'Debt Payments',
        'keywords': ['credit card', 'loan', 'student loan', 'debt'],
        'hint': 'Automatically tracks debt reduction',
        'common_frequencies': ['Monthly'],
    },
]

SAVINGS_SUGGESTIONS = [
    {
        'name': 'Emergency Fund',
        'keywords': ['emergency', 'rainy day', 'safety net'],
        'hint': 'Recommended: 3-6 months of expenses',
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Vacation',
        'keywords': ['vacation', 'travel', 'trip', 'holiday'],
        'common_frequencies': ['Monthly', 'One-time'],
    },
    {
        'name': 'Down Payment',
        'keywords': ['house', 'home', 'property', 'down payment'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Retirement',
        'keywords': ['retirement', '401k', 'ira', 'pension'],
        'common_frequencies': ['Monthly', 'Bi-weekly'],
    },
    {
        'name': 'Investment',
        'keywords': ['investment', 'stocks', 'bonds', 'portfolio'],
        'common_frequencies': ['Monthly', 'One-time'],
    },
    {
        'name': 'New Car',
        'keywords': ['car', 'vehicle', 'auto'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Home Improvement',
        'keywords': ['renovation', 'remodel', 'home improvement'],
        'common_frequencies': ['Monthly', 'One-time'],
    },
]

INCOME_SUGGESTIONS = [
    {
        'name': 'Salary',
        'keywords': ['salary', 'wages', 'paycheck', 'employment', 'payroll'],
        'common_frequencies': ['Bi-weekly', 'Monthly'],
    },
    {
        'name': 'Freelance Income',
        'keywords': ['freelance', 'contract', 'consulting', 'gig'],
        'common_frequencies': ['Monthly', 'One-time'],
    },
    {
        'name': 'Investment Income',
        'keywords': ['dividend', 'interest', 'capital gains', 'investment'],
        'common_frequencies': ['Yearly', 'One-time'],
    },
    {
        'name': 'Rental Income',
        'keywords': ['rental', 'property income', 'tenant'],
        'common_frequencies': ['Monthly'],
    },
    {
        'name': 'Side Hustle',
        'keywords': ['side hustle', 'side job', 'extra income'],
        'common_frequencies': ['Weekly', 'Monthly'],
    },
    {
        'name': 'Bonus',
        'keywords': ['bonus', 'commission', 'incentive'],
        'common_frequencies': ['Yearly', 'One-time'],
    },
]

CONTEXTS = {
    'income': (INCOME_SUGGESTIONS, CategoryType.INCOME),
    'savings': (SAVINGS_SUGGESTIONS, CategoryType.SAVINGS),
    'expenses': (EXPENSE_SUGGESTIONS, CategoryType.EXPENSE),
}


def get_suggestions_by_context(context: str) -> List[Dict]:
    """Seed suggestions for 'expenses', 'savings' or 'income'"""
    suggestions, _ = CONTEXTS.get(context, ([], None))
    return suggestions


def slugify(name: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')


def build_default_categories() -> List[Category]:
    """
    The startup category set, income first, then savings, then expenses.

    Ids are "<type>-<slug>" so a name shared by two contexts
    still yields unique ids.
    """
    categories = []
    for suggestions, category_type in CONTEXTS.values():
        for suggestion in suggestions:
            categories.append(Category(
                id=f"{category_type}-{slugify(suggestion['name'])}",
                name=suggestion['name'],
                type=category_type,
                keywords=list(suggestion['keywords']),
            ))
    return categories


def merge_custom_categories(context: str, custom: List[Dict]) -> List[Dict]:
    """Seed suggestions followed by custom entries not already present"""
    merged = list(get_suggestions_by_context(context))
    seen = {s['name'].lower() for s in merged}
    for entry in custom:
        name = (entry.get('name') or '').strip()
        if name and name.lower() not in seen:
            merged.append(dict(entry, custom=True))
            seen.add(name.lower())
    return merged
