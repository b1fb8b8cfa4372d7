"""
Spending Aggregator

Turns a batch of order records into the analytics summary shown by the
dashboard: total spent, monthly series, category totals, yearly totals by
category and an order-amount histogram.

Malformed rows never abort the batch:
- an unparseable amount counts as 0 and is left out of the histogram
- an unparseable date keeps the row out of the month/year views only
"""
from collections import defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from order_analytics.utils.logger import get_logger

from .categorizer import ProductCategorizer
from .order_loader import ORDER_DATE, PRODUCT_NAME, TOTAL_OWED, parse_amount, parse_order_date

logger = get_logger(__name__)

# (lower bound, label); a bucket runs up to the next bound, lower-inclusive
HISTOGRAM_BUCKETS: Tuple[Tuple[float, str], ...] = (
    (0, '$0-10'),
    (10, '$10-20'),
    (20, '$20-50'),
    (50, '$50-100'),
    (100, '$100-200'),
    (200, '$200-500'),
    (500, '$500-1000'),
    (1000, '$1000+'),
)

HISTOGRAM_LABELS = tuple(label for _, label in HISTOGRAM_BUCKETS)


def histogram_bucket(amount: float) -> str:
    """Label of the histogram bucket holding amount (negatives land in the first)"""
    label = HISTOGRAM_LABELS[0]
    for lower, bucket_label in HISTOGRAM_BUCKETS:
        if amount >= lower:
            label = bucket_label
        else:
            break
    return label


@dataclass(frozen=True)
class AnalyticsSummary:
    """Aggregated spending analytics for one batch of order records"""
    total_spent: float
    purchases_by_month: Mapping[str, float]
    categories: Mapping[str, float]
    yearly_category_totals: Mapping[str, Mapping[str, float]]
    yearly_totals: Mapping[str, float]
    histogram: Mapping[str, int]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with the dashboard's field names"""
        return {
            'totalSpent': self.total_spent,
            'purchasesByMonth': dict(self.purchases_by_month),
            'yearlyTotals': dict(self.yearly_totals),
            'yearlyCategoryTotals': {
                year: dict(totals) for year, totals in self.yearly_category_totals.items()
            },
            'categories': dict(self.categories),
            'histogram': dict(self.histogram),
        }


def _freeze(mapping: Dict) -> Mapping:
    return MappingProxyType(dict(mapping))


def aggregate(records: Iterable[Mapping[str, str]],
              categorizer: Optional[ProductCategorizer] = None) -> AnalyticsSummary:
    """
    Aggregate order records into an AnalyticsSummary

    Args:
        records: Cleaned order records (orderDate, productName, totalOwed, ...)
        categorizer: Product categorizer (default: built-in taxonomy)

    Returns:
        Immutable AnalyticsSummary
    """
    categorizer = categorizer or ProductCategorizer()

    total_spent = 0.0
    purchases_by_month: Dict[str, float] = defaultdict(float)
    categories: Dict[str, float] = defaultdict(float)
    yearly_category_totals: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(float))
    histogram: Dict[str, int] = defaultdict(int)

    row_count = 0
    bad_amounts = 0
    bad_dates = 0

    for record in records:
        row_count += 1

        amount = parse_amount(record.get(TOTAL_OWED) or '')
        if amount is None:
            bad_amounts += 1
            value = 0.0
        else:
            value = amount
            histogram[histogram_bucket(amount)] += 1

        category = categorizer.classify(record.get(PRODUCT_NAME) or '')

        total_spent += value
        categories[category] += value

        order_date = parse_order_date(record.get(ORDER_DATE) or '')
        if order_date is None:
            bad_dates += 1
            continue

        purchases_by_month[f"{order_date.year:04d}-{order_date.month:02d}"] += value
        yearly_category_totals[f"{order_date.year:04d}"][category] += value

    if bad_amounts or bad_dates:
        logger.warning(
            "Aggregated %d rows with %d malformed amount(s) and %d malformed date(s)",
            row_count, bad_amounts, bad_dates
        )
    logger.debug(
        "Aggregated %d rows: total %.2f across %d categories and %d months",
        row_count, total_spent, len(categories), len(purchases_by_month)
    )

    category_order = categorizer.taxonomy.rank
    frozen_yearly = _freeze({
        year: _freeze({k: totals[k] for k in sorted(totals, key=category_order)})
        for year, totals in sorted(yearly_category_totals.items())
    })

    # Yearly totals are derived from the per-category view so the two always agree
    yearly_totals = {year: sum(totals.values()) for year, totals in frozen_yearly.items()}

    return AnalyticsSummary(
        total_spent=total_spent,
        purchases_by_month=_freeze({k: purchases_by_month[k] for k in sorted(purchases_by_month)}),
        categories=_freeze({k: categories[k] for k in sorted(categories, key=category_order)}),
        yearly_category_totals=frozen_yearly,
        yearly_totals=_freeze(yearly_totals),
        histogram=_freeze({label: histogram[label] for label in HISTOGRAM_LABELS if label in histogram}),
    )
