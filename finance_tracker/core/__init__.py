"""
Finance Tracker Core

Pure categorization and income logic: merchant normalization, category
confidence scoring, income frequency aggregation and budget math.
"""

from .merchant_normalizer import normalize_merchant_name, is_credit_card_payment, is_split_worthy
from .category_matcher import calculate_confidence, suggest_category, CategorySuggestion
from .income_aggregator import (
    convert_to_yearly,
    convert_from_yearly,
    calculate_total_yearly_income,
    analyze_income_distribution,
    validate_income_source,
)
from .categorization_orchestrator import CategorizationOrchestrator
from .models import Category, CategoryType, Frequency, IncomeSource, Transaction

__all__ = [
    'normalize_merchant_name',
    'is_credit_card_payment',
    'is_split_worthy',
    'calculate_confidence',
    'suggest_category',
    'CategorySuggestion',
    'convert_to_yearly',
    'convert_from_yearly',
    'calculate_total_yearly_income',
    'analyze_income_distribution',
    'validate_income_source',
    'CategorizationOrchestrator',
    'Category',
    'CategoryType',
    'Frequency',
    'IncomeSource',
    'Transaction',
]
