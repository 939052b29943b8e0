"""
Finance Tracker

A personal finance tracker that imports bank transactions, suggests
categories from merchant names and keywords, and summarizes income
captured during onboarding.
"""

__version__ = "1.0.0"

# Expose main entry points for easy imports
from .core.merchant_normalizer import normalize_merchant_name
from .core.category_matcher import suggest_category
from .core.income_aggregator import analyze_income_distribution
from .core.categorization_orchestrator import CategorizationOrchestrator
from .data_manager import DataManager

__all__ = [
    'normalize_merchant_name',
    'suggest_category',
    'analyze_income_distribution',
    'CategorizationOrchestrator',
    'DataManager',
]
