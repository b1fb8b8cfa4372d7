"""
Order Analytics

Spending analytics for Amazon order history exports: product categorization
by keyword scoring and aggregation into monthly, yearly, category and
order-size views.
"""

__version__ = "1.0.0"

from .core import ProductCategorizer, Taxonomy, aggregate, detect_category, read_order_history

__all__ = [
    'ProductCategorizer',
    'Taxonomy',
    'aggregate',
    'detect_category',
    'read_order_history',
]
