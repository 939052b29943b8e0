#!/usr/bin/env python3
"""
Transaction import CLI

Imports transactions from a bank CSV file, suggests categories and
stores them with the data manager.
"""
import argparse
import sys
from pathlib import Path
from dotenv import load_dotenv

from finance_tracker.core.categorization_orchestrator import CategorizationOrchestrator
from finance_tracker.core.category_matcher import confidence_label
from finance_tracker.core.csv_parser import parse_transactions_csv
from finance_tracker.core.merchant_normalizer import normalize_merchant_name
from finance_tracker.data_manager import DataManager, create_storage
from finance_tracker.utils import config


# Load environment variables
load_dotenv()


def print_sample(categorized, limit: int = 10):
    """Print the first few categorized transactions"""
    print(f"\n📋 Sample Results (first {limit}):")
    for i, txn in enumerate(categorized[:limit], 1):
        status = "✅" if not txn.needs_review else "⚠️ "
        merchant = normalize_merchant_name(txn.description) or txn.description
        category = txn.category.name if txn.category else "Uncategorized"
        print(f"{status} {i:2d}. {merchant[:40]:<40} → {category}")
        print(f"       ${abs(txn.amount):>9.2f}  {confidence_label(txn.confidence):<6}  {txn.confidence:.0%}")

    if len(categorized) > limit:
        print(f"       ... and {len(categorized) - limit} more")


def print_review_queue(categorized, limit: int = 5):
    """Print the transactions still waiting for a category decision"""
    needs_review = [t for t in categorized if t.needs_review]
    if not needs_review:
        print(f"\n✅ All transactions categorized with high confidence!")
        return

    print(f"\n⚠️  {len(needs_review)} transactions need review:")
    for txn in needs_review[:limit]:
        print(f"   • {txn.description[:50]:<50} ${abs(txn.amount):>9.2f}")
    if len(needs_review) > limit:
        print(f"   ... and {len(needs_review) - limit} more")


def main(argv=None):
    """Main import function"""
    parser = argparse.ArgumentParser(description='Import bank CSV transactions')
    parser.add_argument('csv_file', help='Path to bank CSV file')
    parser.add_argument('--date-column', help='Header of the date column (default: auto-detect)')
    parser.add_argument('--description-column', help='Header of the description column (default: auto-detect)')
    parser.add_argument('--amount-column', help='Header of the amount column (default: auto-detect)')
    parser.add_argument('--backend', choices=['json', 'postgres'],
                        help='Storage backend (default: STORAGE_BACKEND or json)')
    parser.add_argument('--data-dir', help='Data directory for the json backend')
    parser.add_argument('--dry-run', action='store_true', help='Parse and categorize but do not save')

    args = parser.parse_args(argv)

    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        print(f"❌ File not found: {csv_path}")
        sys.exit(1)

    column_mapping = None
    if args.date_column or args.description_column or args.amount_column:
        if not (args.date_column and args.description_column and args.amount_column):
            print("❌ Give all three of --date-column, --description-column and --amount-column")
            sys.exit(1)
        column_mapping = {
            'date': args.date_column,
            'description': args.description_column,
            'amount': args.amount_column,
        }

    print("=" * 80)
    print("📥 TRANSACTION IMPORT")
    print("=" * 80)
    print(f"CSV File: {csv_path}")
    print(f"Backend: {args.backend or config.get_storage_backend()}")
    print(f"Dry Run: {args.dry_run}")
    print("=" * 80)

    print("\n🔌 Opening storage...")
    try:
        manager = DataManager(create_storage(args.backend, Path(args.data_dir) if args.data_dir else None))
        print("   ✅ Ready")
    except Exception as e:
        print(f"   ❌ Storage unavailable: {e}")
        sys.exit(1)

    try:
        # Load categories
        print("\n📚 Loading categories...")
        categories = manager.load_categories()
        print(f"   ✅ Loaded {len(categories)} categories")

        # Parse CSV
        print(f"\n📄 Parsing CSV file...")
        transactions = parse_transactions_csv(csv_path, column_mapping)

        # Create orchestrator
        print(f"\n🧠 Initializing categorization engine...")
        orchestrator = CategorizationOrchestrator(
            categories=categories,
            review_threshold=config.get_review_threshold(),
        )
        print("   ✅ Ready")

        # Categorize
        print(f"\n🏷️  Categorizing {len(transactions)} transactions...")
        categorized = orchestrator.categorize_batch(transactions)

        orchestrator.print_stats()
        print_sample(categorized)

        summary = orchestrator.summarize(categorized)
        print(f"\n💰 Total amount (excluding ignored): ${summary['total_amount']:,.2f}")

        if args.dry_run:
            print(f"\n🔍 DRY RUN - Not saving transactions")
        else:
            print(f"\n💾 Saving transactions...")
            result = manager.add_transactions(categorized)
            print(f"   ✅ Inserted: {result['inserted']}")
            if result['duplicates'] > 0:
                print(f"   ⏭️  Skipped (duplicates): {result['duplicates']}")

        print_review_queue(categorized)

        print("\n" + "=" * 80)
        print("✅ Import complete!")
        print("=" * 80)

    except Exception as e:
        print(f"\n❌ Import failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
