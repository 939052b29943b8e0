"""
Category Matcher

Scores transactions against categories with:
- Exact merchant mappings (learned from manual categorization, always 1.0)
- Keyword substring hits (0.3 per hit, capped at 0.9)
- Best-match selection where the first category seen wins ties
"""
from dataclasses import dataclass
from typing import List, Optional

from .merchant_normalizer import normalize_merchant_name
from .models import Category

KEYWORD_WEIGHT = 0.3
MAX_KEYWORD_CONFIDENCE = 0.9
EXACT_MATCH_CONFIDENCE = 1.0


@dataclass
class CategorySuggestion:
    """Best category for a transaction and how sure we are"""
    category: Category
    confidence: float  # 0.0 to 1.0


def calculate_confidence(description: str, category: Optional[Category]) -> float:
    """
    Score how well a description matches a category.

    Args:
        description: Raw transaction description
        category: Candidate category

    Returns:
        1.0 for an exact merchant mapping, otherwise min(hits * 0.3, 0.9)
    """
    if category is None or category.keywords is None or not description:
        return 0.0

    normalized_merchant = normalize_merchant_name(description)
    if category.merchant_mappings and normalized_merchant in category.merchant_mappings:
        return EXACT_MATCH_CONFIDENCE

    desc = description.lower()
    matches = sum(1 for keyword in category.keywords if keyword.lower() in desc)

    # Rounded so three hits plateau at exactly 0.9
    return round(min(matches * KEYWORD_WEIGHT, MAX_KEYWORD_CONFIDENCE), 2)


def suggest_category(transaction, categories: Optional[List[Category]]) -> Optional[CategorySuggestion]:
    """
    Pick the highest-confidence category for a transaction.

    Scores must beat the current best strictly, so earlier categories win
    ties and a zero score is never suggested.

    Returns:
        CategorySuggestion, or None when nothing scores above 0
    """
    if transaction is None or not categories:
        return None

    best_match = None
    highest_confidence = 0.0

    for category in categories:
        confidence = calculate_confidence(transaction.description, category)
        if confidence > highest_confidence:
            highest_confidence = confidence
            best_match = CategorySuggestion(category=category, confidence=confidence)

    return best_match


def rank_categories(transaction, categories: Optional[List[Category]], limit: int = 3) -> List[CategorySuggestion]:
    """
    All categories with a non-zero score, best first.

    Used by the review queue to offer alternatives. Sorting is stable, so
    equal scores keep their category order.
    """
    if transaction is None or not categories:
        return []

    scored = [
        CategorySuggestion(category=category,
                           confidence=calculate_confidence(transaction.description, category))
        for category in categories
    ]
    scored = [s for s in scored if s.confidence > 0]
    scored.sort(key=lambda s: s.confidence, reverse=True)
    return scored[:limit]


def confidence_label(confidence: float) -> str:
    """Bucket a score the way the review queue displays it"""
    if confidence >= 0.8:
        return 'High'
    if confidence >= 0.5:
        return 'Medium'
    return 'Low'
