"""
Purchases table helpers

Search, sort and paging over order records for the purchases table, plus the
per-category averages and colour palette used by the charts.
"""
import math
from collections import defaultdict
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .categorizer import ProductCategorizer
from .order_loader import (
    ORDER_DATE,
    PRODUCT_NAME,
    RECORD_FIELDS,
    TOTAL_OWED,
    parse_amount,
    parse_order_date,
)
from .taxonomy import OTHER_CATEGORY

PAGE_SIZE_OPTIONS = (5, 10, 25, 50)
DEFAULT_PAGE_SIZE = 10

CATEGORY_COLORS = {
    'Electronics': '#2196F3',
    'Books & Media': '#4CAF50',
    'Clothing & Fashion': '#FF9800',
    'Home & Kitchen': '#9C27B0',
    'Beauty & Personal Care': '#E91E63',
    'Sports & Outdoors': '#795548',
    'Toys & Games': '#FFEB3B',
    'Food & Grocery': '#F44336',
    'Health & Medical': '#00BCD4',
    'Office & School': '#607D8B',
    OTHER_CATEGORY: '#9E9E9E',
}


def category_color(category: str) -> str:
    """Chart colour for a category; grey for anything unknown"""
    return CATEGORY_COLORS.get(category, CATEGORY_COLORS[OTHER_CATEGORY])


def search_purchases(records: Sequence[Mapping[str, str]], term: Optional[str]) -> List[Mapping[str, str]]:
    """Records whose product name contains term (case-insensitive)"""
    if not term or not term.strip():
        return list(records)

    needle = term.strip().lower()
    return [r for r in records if needle in (r.get(PRODUCT_NAME) or '').lower()]


def sort_purchases(records: Sequence[Mapping[str, str]],
                   column: str = ORDER_DATE,
                   descending: bool = True) -> List[Mapping[str, str]]:
    """
    Sort records by one column

    Dates and amounts sort by their parsed value; rows that do not parse go last
    in either direction. Other columns sort as case-insensitive text.

    Raises:
        ValueError: if column is not a record field
    """
    if column not in RECORD_FIELDS:
        raise ValueError(f"Unknown column: {column}")

    if column == ORDER_DATE:
        parse = parse_order_date
    elif column == TOTAL_OWED:
        parse = parse_amount
    else:
        return sorted(records, key=lambda r: (r.get(column) or '').lower(), reverse=descending)

    parsed: List[Tuple[object, Mapping[str, str]]] = []
    unparsed: List[Mapping[str, str]] = []
    for record in records:
        value = parse(record.get(column) or '')
        if value is None:
            unparsed.append(record)
        else:
            parsed.append((value, record))

    parsed.sort(key=lambda item: item[0], reverse=descending)
    return [record for _, record in parsed] + unparsed


def paginate(records: Sequence[Mapping[str, str]],
             page: int = 0,
             page_size: int = DEFAULT_PAGE_SIZE) -> Tuple[List[Mapping[str, str]], int]:
    """
    Slice one zero-based page out of records

    Returns:
        (rows on the page, total page count)
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if page < 0:
        raise ValueError("page must not be negative")

    total_pages = math.ceil(len(records) / page_size)
    start = page * page_size
    return list(records[start:start + page_size]), total_pages


def category_averages(records: Sequence[Mapping[str, str]],
                      categorizer: Optional[ProductCategorizer] = None) -> Dict[str, float]:
    """
    Average order amount per category

    Only rows with a product name and a parseable amount take part.
    """
    categorizer = categorizer or ProductCategorizer()
    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)

    for record in records:
        name = record.get(PRODUCT_NAME) or ''
        amount = parse_amount(record.get(TOTAL_OWED) or '')
        if not name or amount is None:
            continue
        category = categorizer.classify(name)
        totals[category] += amount
        counts[category] += 1

    ordered = sorted(totals, key=categorizer.taxonomy.rank)
    return {cat: totals[cat] / counts[cat] for cat in ordered}


def latest_order_date(records: Sequence[Mapping[str, str]]) -> Optional[date]:
    """Most recent parseable order date, if any"""
    dates = [d for d in (parse_order_date(r.get(ORDER_DATE) or '') for r in records) if d]
    return max(dates) if dates else None
