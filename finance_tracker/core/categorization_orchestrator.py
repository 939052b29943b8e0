"""
Categorization Orchestrator

Categorizes imported transactions using:
1. Auto-ignore (card payments and transfers go to the Ignore category)
2. Category suggestion (merchant mappings, then keyword confidence)
3. Review queue (anything below the review threshold)
"""
from typing import Dict, List, Optional

from .category_enhancer import IGNORE_CATEGORY_ID, create_ignore_category, enhance_categories, should_auto_ignore
from .category_matcher import suggest_category
from .currency import ZERO
from .models import Category, Transaction

DEFAULT_REVIEW_THRESHOLD = 0.80


class CategorizationOrchestrator:
    """
    Orchestrates transaction categorization against a category set
    """

    def __init__(self, categories: List[Category], review_threshold: float = DEFAULT_REVIEW_THRESHOLD):
        """
        Args:
            categories: User categories (keywords are generated where missing)
            review_threshold: Confidence below which transactions need review
        """
        self.categories = enhance_categories(categories)
        self.review_threshold = review_threshold
        self.ignore_category = next(
            (c for c in self.categories if c.id == IGNORE_CATEGORY_ID),
            create_ignore_category(),
        )

        # Stats
        self.stats = {
            'total': 0,
            'auto_ignored': 0,
            'suggested': 0,
            'high_confidence': 0,
            'needs_review': 0,
            'uncategorized': 0,
        }

    def categorize_transaction(self, txn: Transaction) -> Transaction:
        """
        Categorize a single transaction

        Args:
            txn: Transaction object

        Returns:
            A categorized copy; the input is left untouched
        """
        self.stats['total'] += 1

        # Step 1: Payments and transfers are ignored outright
        if should_auto_ignore(txn):
            self.stats['auto_ignored'] += 1
            return txn.with_category(self.ignore_category, confidence=1.0, needs_review=False)

        # Step 2: Best keyword/merchant match
        suggestion = suggest_category(txn, self.categories)
        if suggestion:
            needs_review = suggestion.confidence < self.review_threshold
            self.stats['suggested'] += 1
            if needs_review:
                self.stats['needs_review'] += 1
            else:
                self.stats['high_confidence'] += 1
            return txn.with_category(suggestion.category, suggestion.confidence, needs_review)

        # Step 3: Nothing matched
        self.stats['uncategorized'] += 1
        self.stats['needs_review'] += 1
        return txn.with_category(None, confidence=0.0, needs_review=True)

    def categorize_batch(self, transactions: List[Transaction]) -> List[Transaction]:
        """Categorize multiple transactions, preserving order"""
        return [self.categorize_transaction(txn) for txn in transactions]

    def summarize(self, transactions: List[Transaction]) -> Dict:
        """
        Review-screen totals. Ignored transactions are excluded from
        every figure except the import count.
        """
        kept = [t for t in transactions if not (t.category and t.category.id == IGNORE_CATEGORY_ID)]
        return {
            'total_imported': len(transactions),
            'categorized': len([t for t in kept if t.category and not t.needs_review]),
            'needs_review': len([t for t in kept if t.needs_review]),
            'total_amount': sum((abs(t.amount) for t in kept), ZERO),
        }

    def find_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)

    def print_stats(self):
        """Print categorization statistics"""
        if self.stats['total'] == 0:
            print("No transactions categorized yet")
            return

        total = self.stats['total']

        print("\n" + "=" * 80)
        print("📊 CATEGORIZATION STATISTICS")
        print("=" * 80)
        print(f"Total transactions: {total}")
        print(f"\n✅ Categorization Results:")
        print(f"  • Auto-ignored: {self.stats['auto_ignored']} ({self.stats['auto_ignored']/total*100:.1f}%)")
        print(f"  • Suggested: {self.stats['suggested']} ({self.stats['suggested']/total*100:.1f}%)")
        print(f"  • No match: {self.stats['uncategorized']} ({self.stats['uncategorized']/total*100:.1f}%)")

        print(f"\n📋 Review Status:")
        print(f"  • High confidence (≥{self.review_threshold*100:.0f}%): {self.stats['high_confidence']} ({self.stats['high_confidence']/total*100:.1f}%)")
        print(f"  • Needs review: {self.stats['needs_review']} ({self.stats['needs_review']/total*100:.1f}%)")

        print("=" * 80)
