"""
Order Analytics core

Categorizes Amazon order lines by product name and aggregates them into
spending analytics.
"""

# Expose main classes for easy imports
from .taxonomy import DEFAULT_TAXONOMY, OTHER_CATEGORY, Taxonomy, load_taxonomy_from_file
from .categorizer import ProductCategorizer, detect_category
from .order_loader import normalize_order_row, read_order_history
from .aggregator import AnalyticsSummary, aggregate

__all__ = [
    'DEFAULT_TAXONOMY',
    'OTHER_CATEGORY',
    'Taxonomy',
    'load_taxonomy_from_file',
    'ProductCategorizer',
    'detect_category',
    'normalize_order_row',
    'read_order_history',
    'AnalyticsSummary',
    'aggregate',
]
