"""
Chart data builders

Shapes an AnalyticsSummary into pandas DataFrames ready for Plotly.
"""
from typing import Mapping, Sequence

import pandas as pd

from order_analytics.core.aggregator import HISTOGRAM_LABELS, AnalyticsSummary
from order_analytics.core.order_loader import COLUMN_MAP
from order_analytics.core.purchases import category_color


def monthly_frame(summary: AnalyticsSummary) -> pd.DataFrame:
    """One row per month, oldest first"""
    months = sorted(summary.purchases_by_month)
    return pd.DataFrame({
        'month': months,
        'amount': [summary.purchases_by_month[m] for m in months],
    })


def category_frame(summary: AnalyticsSummary) -> pd.DataFrame:
    """Category totals with share of total spent and a pie label"""
    df = pd.DataFrame({
        'category': list(summary.categories),
        'amount': list(summary.categories.values()),
    })
    if summary.total_spent:
        df['percent'] = df['amount'] / summary.total_spent * 100
    else:
        df['percent'] = 0.0
    df['label'] = [f"{cat} ({pct:.1f}%)" for cat, pct in zip(df['category'], df['percent'])]
    df['color'] = [category_color(cat) for cat in df['category']]
    return df


def yearly_category_frame(summary: AnalyticsSummary) -> pd.DataFrame:
    """Long format (year, category, amount) for a stacked bar; gaps filled with 0"""
    years = sorted(summary.yearly_totals)
    rows = [
        {
            'year': year,
            'category': category,
            'amount': summary.yearly_category_totals.get(year, {}).get(category, 0.0),
        }
        for year in years
        for category in summary.categories
    ]
    return pd.DataFrame(rows, columns=['year', 'category', 'amount'])


def histogram_frame(summary: AnalyticsSummary) -> pd.DataFrame:
    """All eight buckets in order, missing buckets as 0"""
    return pd.DataFrame({
        'bucket': list(HISTOGRAM_LABELS),
        'count': [summary.histogram.get(label, 0) for label in HISTOGRAM_LABELS],
    })


def averages_frame(averages: Mapping[str, float]) -> pd.DataFrame:
    return pd.DataFrame({
        'category': list(averages),
        'average': list(averages.values()),
    })


def purchases_frame(records: Sequence[Mapping[str, str]]) -> pd.DataFrame:
    """Records as a table with the export's column headers"""
    headers = list(COLUMN_MAP)
    rows = [[record.get(COLUMN_MAP[h], '') for h in headers] for record in records]
    return pd.DataFrame(rows, columns=headers)
