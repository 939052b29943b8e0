#!/usr/bin/env python3
"""
Income report CLI

Summarizes the income sources saved during onboarding: yearly and
monthly totals, the primary source, diversification advice and the
monthly budget balance.
"""
import argparse
import json
import sys
from pathlib import Path
from dotenv import load_dotenv

from finance_tracker.core.budget_calculations import check_budget_balance
from finance_tracker.core.currency import format_currency
from finance_tracker.core.income_aggregator import (
    FREQUENCY_DESCRIPTIONS,
    analyze_income_distribution,
    convert_to_yearly,
    format_income_insights,
    validate_all_income_sources,
)
from finance_tracker.data_manager import DataManager, create_storage


# Load environment variables
load_dotenv()


def load_profile(args) -> dict:
    """Profile from --profile JSON file, or the one in storage"""
    if args.profile:
        with open(args.profile, 'r', encoding='utf-8') as f:
            return json.load(f)

    manager = DataManager(create_storage(args.backend, Path(args.data_dir) if args.data_dir else None))
    return manager.load_user_data() or {}


def print_sources(sources):
    print(f"\n💵 Income Sources:")
    for source in sources:
        name = source.get('name') or '(unnamed)'
        frequency = source.get('frequency') or '?'
        yearly = convert_to_yearly(source.get('amount'), frequency)
        description = FREQUENCY_DESCRIPTIONS.get(frequency, '')
        print(f"  • {name:<30} {format_currency(source.get('amount')):>12}  {frequency:<10} "
              f"→ {format_currency(yearly):>12}/yr  {description}")


def print_balance(profile):
    balance = check_budget_balance(profile)
    print(f"\n⚖️  Monthly Budget Balance:")
    if balance['is_balanced']:
        print(f"  ✅ Balanced")
    elif balance['is_over_budget']:
        print(f"  ❌ Over budget by {format_currency(balance['difference'])}")
    else:
        print(f"  💡 {format_currency(balance['remaining'])} left to allocate")


def main(argv=None):
    """Main report function"""
    parser = argparse.ArgumentParser(description='Summarize onboarding income sources')
    parser.add_argument('--profile', help='Read the profile from a JSON file instead of storage')
    parser.add_argument('--backend', choices=['json', 'postgres'],
                        help='Storage backend (default: STORAGE_BACKEND or json)')
    parser.add_argument('--data-dir', help='Data directory for the json backend')

    args = parser.parse_args(argv)

    try:
        profile = load_profile(args)
    except Exception as e:
        print(f"❌ Could not load profile: {e}")
        sys.exit(1)

    sources = (profile.get('income') or {}).get('incomeSources') or []

    print("=" * 80)
    print("📈 INCOME REPORT")
    print("=" * 80)

    if not sources:
        print("\nNo income sources saved yet")
        print("=" * 80)
        return

    print_sources(sources)

    errors = validate_all_income_sources(sources)
    if errors:
        print(f"\n⚠️  {len(errors)} problems found:")
        for error in errors:
            print(f"   • {error}")

    distribution = analyze_income_distribution(sources)
    if distribution is None:
        print("\nTotal yearly income is $0.00")
    else:
        print(f"\n📊 Distribution:")
        print(f"  • Total yearly: {format_currency(distribution.total_yearly)}")
        print(f"  • Monthly average: {format_currency(distribution.monthly_average)}")

        insights = format_income_insights(distribution)
        print(f"  • {insights['primary_text']}")
        for message in insights['messages']:
            icon = "✅" if message['type'] == 'success' else "⚠️ "
            print(f"  {icon} {message['text']}")

    print_balance(profile)

    print("=" * 80)


if __name__ == "__main__":
    main()
