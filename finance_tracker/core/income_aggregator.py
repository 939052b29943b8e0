"""
Income Aggregator

Puts income sources paid at different frequencies on a common yearly
basis, totals them, and measures how dependent the household is on its
largest source.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from .currency import ZERO, add, divide, is_positive, multiply, to_amount, validate_currency_input
from .models import Frequency, IncomeSource

FREQUENCY_MULTIPLIERS = {
    Frequency.WEEKLY: 52,
    Frequency.BI_WEEKLY: 26,
    Frequency.MONTHLY: 12,
    Frequency.YEARLY: 1,
    Frequency.ONE_TIME: 0,  # One-time income doesn't count toward recurring totals
}

FREQUENCY_DESCRIPTIONS = {
    Frequency.WEEKLY: 'Every week (52x per year)',
    Frequency.BI_WEEKLY: 'Every 2 weeks (26x per year)',
    Frequency.MONTHLY: 'Every month (12x per year)',
    Frequency.YEARLY: 'Once per year',
    Frequency.ONE_TIME: 'Single occurrence',
}

# Unknown frequencies are treated as yearly amounts
DEFAULT_MULTIPLIER = 1

DIVERSIFICATION_THRESHOLD = 80


@dataclass
class IncomeDistribution:
    """How income is spread across sources"""
    total_sources: int
    primary_source: str
    primary_percentage: int
    is_diversified: bool
    total_yearly: Decimal
    monthly_average: Decimal


def _field(source, name: str):
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def _as_source(source) -> IncomeSource:
    if isinstance(source, IncomeSource):
        return source
    return IncomeSource.from_dict(source)


def convert_to_yearly(amount, frequency: str) -> Decimal:
    """
    Annualize an amount paid at the given frequency.

    Examples:
        convert_to_yearly(1000, 'Monthly')  -> 12000.00
        convert_to_yearly(5000, 'One-time') -> 0.00
    """
    multiplier = FREQUENCY_MULTIPLIERS.get(frequency, DEFAULT_MULTIPLIER)
    return multiply(amount, multiplier)


def convert_from_yearly(yearly_amount, target_frequency: str) -> Decimal:
    """Spread a yearly amount over the target frequency (One-time gives 0)"""
    multiplier = FREQUENCY_MULTIPLIERS.get(target_frequency, DEFAULT_MULTIPLIER)
    if multiplier == 0:
        return ZERO
    return divide(yearly_amount, multiplier)


def calculate_total_yearly_income(sources: Optional[Iterable] = None) -> Decimal:
    """Sum of every source's yearly-equivalent amount"""
    total = ZERO
    for source in sources or []:
        source = _as_source(source)
        total = add(total, convert_to_yearly(source.amount, source.frequency))
    return total


def analyze_income_distribution(sources: Optional[Iterable] = None) -> Optional[IncomeDistribution]:
    """
    Find the primary income source and whether income is diversified.

    Returns:
        IncomeDistribution, or None when there are no sources or the
        yearly total is zero
    """
    sources = [_as_source(s) for s in sources or []]
    if not sources:
        return None

    total_yearly = calculate_total_yearly_income(sources)
    if total_yearly == 0:
        return None

    # Strict comparison: the first source wins ties
    primary = sources[0]
    primary_yearly = convert_to_yearly(primary.amount, primary.frequency)
    for source in sources[1:]:
        yearly = convert_to_yearly(source.amount, source.frequency)
        if yearly > primary_yearly:
            primary, primary_yearly = source, yearly

    percentage = (primary_yearly / total_yearly * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    primary_percentage = int(percentage)

    return IncomeDistribution(
        total_sources=len(sources),
        primary_source=primary.name,
        primary_percentage=primary_percentage,
        is_diversified=len(sources) > 1 and primary_percentage < DIVERSIFICATION_THRESHOLD,
        total_yearly=total_yearly,
        monthly_average=convert_from_yearly(total_yearly, Frequency.MONTHLY),
    )


def validate_income_source(source) -> List[str]:
    """
    Check an income source entered by the user.

    Args:
        source: IncomeSource or a raw dict from the onboarding form

    Returns:
        List of human-readable problems (empty when valid)
    """
    errors = []

    name = _field(source, 'name')
    if not name or not str(name).strip():
        errors.append('Income source name is required')

    amount = _field(source, 'amount')
    is_valid, error = validate_currency_input(amount)
    if not is_valid:
        errors.append(error)
    elif not is_positive(to_amount(amount)):
        errors.append('Amount must be greater than 0')

    frequency = _field(source, 'frequency')
    if not frequency or frequency not in FREQUENCY_MULTIPLIERS:
        errors.append('Valid frequency is required')

    return errors


def validate_all_income_sources(sources: Optional[Iterable] = None) -> List[str]:
    """Validate every source, prefixing each problem with its position"""
    all_errors = []
    for index, source in enumerate(sources or [], start=1):
        for error in validate_income_source(source):
            all_errors.append(f"Income source {index}: {error}")
    return all_errors


def format_income_insights(distribution: Optional[IncomeDistribution]) -> Optional[Dict]:
    """Turn a distribution into display text and advice messages"""
    if distribution is None:
        return None

    if distribution.is_diversified:
        message = {'type': 'success', 'text': 'Good income diversification reduces financial risk'}
    elif distribution.total_sources == 1:
        message = {'type': 'warning', 'text': 'Consider developing additional income sources for stability'}
    else:
        message = {'type': 'warning', 'text': 'Heavy reliance on one source - consider balancing income streams'}

    return {
        'primary_text': (f"Primary income source: {distribution.primary_source} "
                         f"({distribution.primary_percentage}% of total)"),
        'messages': [message],
    }
