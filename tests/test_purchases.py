from datetime import date

import pytest

from order_analytics.core.categorizer import ProductCategorizer
from order_analytics.core.purchases import (
    CATEGORY_COLORS,
    category_averages,
    category_color,
    latest_order_date,
    paginate,
    search_purchases,
    sort_purchases,
)
from order_analytics.core.taxonomy import OTHER_CATEGORY, Taxonomy


def _names(records):
    return [r['productName'] for r in records]


def test_search_is_case_insensitive_substring(sample_records) -> None:
    assert _names(search_purchases(sample_records, 'LAPTOP')) == ['Laptop Charger']
    assert _names(search_purchases(sample_records, 'e')) == ['Wireless Mouse', 'Coffee Beans', 'Laptop Charger']
    assert search_purchases(sample_records, 'vacuum') == []


def test_blank_search_returns_everything(sample_records) -> None:
    assert search_purchases(sample_records, '') == sample_records
    assert search_purchases(sample_records, None) == sample_records
    assert search_purchases(sample_records, '   ') == sample_records


def test_sort_by_date_defaults_to_newest_first(sample_records) -> None:
    rows = sample_records + [{'orderDate': 'unknown', 'productName': 'Mystery', 'totalOwed': '1'}]

    assert _names(sort_purchases(rows)) == ['Laptop Charger', 'Coffee Beans', 'Wireless Mouse', 'Mystery']
    assert _names(sort_purchases(rows, 'orderDate', descending=False)) == [
        'Wireless Mouse', 'Coffee Beans', 'Laptop Charger', 'Mystery'
    ]


def test_sort_by_amount_is_numeric(sample_records) -> None:
    rows = sample_records + [
        {'orderDate': '2023-03-01', 'productName': 'Desk', 'totalOwed': '100.00'},
        {'orderDate': '2023-03-02', 'productName': 'Broken', 'totalOwed': 'N/A'},
    ]

    assert _names(sort_purchases(rows, 'totalOwed', descending=False)) == [
        'Coffee Beans', 'Wireless Mouse', 'Laptop Charger', 'Desk', 'Broken'
    ]


def test_sort_by_text_ignores_case() -> None:
    rows = [{'productName': 'banana'}, {'productName': 'Apple'}, {'productName': 'cherry'}]

    assert _names(sort_purchases(rows, 'productName', descending=False)) == ['Apple', 'banana', 'cherry']


def test_sort_rejects_unknown_column(sample_records) -> None:
    with pytest.raises(ValueError):
        sort_purchases(sample_records, 'Order Date')


def test_paginate() -> None:
    rows = [{'productName': str(i)} for i in range(23)]

    page, total_pages = paginate(rows, 0, 10)
    assert total_pages == 3
    assert _names(page) == [str(i) for i in range(10)]

    page, _ = paginate(rows, 2, 10)
    assert _names(page) == ['20', '21', '22']

    page, _ = paginate(rows, 5, 10)
    assert page == []

    assert paginate([], 0, 10) == ([], 0)


@pytest.mark.parametrize('page, page_size', [(0, 0), (-1, 10)])
def test_paginate_rejects_bad_arguments(page, page_size) -> None:
    with pytest.raises(ValueError):
        paginate([], page, page_size)


def test_category_averages_skip_unusable_rows(sample_records) -> None:
    rows = sample_records + [
        {'orderDate': '2023-03-01', 'productName': '', 'totalOwed': '99.00'},
        {'orderDate': '2023-03-01', 'productName': 'Laptop Stand', 'totalOwed': 'N/A'},
    ]

    averages = category_averages(rows)

    assert averages == {'Electronics': pytest.approx(35.00), 'Food & Grocery': pytest.approx(15.50)}


def test_category_averages_with_custom_taxonomy() -> None:
    categorizer = ProductCategorizer(Taxonomy({'Pets': ['dog']}))
    rows = [
        {'productName': 'Dog Bed', 'totalOwed': '40'},
        {'productName': 'Dog Bowl', 'totalOwed': '10'},
        {'productName': 'Stapler', 'totalOwed': '6'},
    ]

    assert category_averages(rows, categorizer) == {'Pets': 25.0, OTHER_CATEGORY: 6.0}


def test_category_color_falls_back_to_grey() -> None:
    assert category_color('Electronics') == '#2196F3'
    assert category_color('Pets') == CATEGORY_COLORS[OTHER_CATEGORY]


def test_latest_order_date(sample_records) -> None:
    assert latest_order_date(sample_records) == date(2023, 2, 1)
    assert latest_order_date([{'orderDate': ''}]) is None
