#!/usr/bin/env python3
"""
Order analytics CLI

Reads an Amazon order history CSV and prints the spending analytics, or the
purchases table.
"""
import argparse
import json
import sys
from pathlib import Path

from order_analytics.core.aggregator import HISTOGRAM_LABELS, AnalyticsSummary, aggregate
from order_analytics.core.categorizer import ProductCategorizer
from order_analytics.core.order_loader import (
    ORDER_DATE,
    ORDER_STATUS,
    PRODUCT_NAME,
    RECORD_FIELDS,
    TOTAL_OWED,
    read_order_history,
)
from order_analytics.core.purchases import (
    DEFAULT_PAGE_SIZE,
    latest_order_date,
    paginate,
    search_purchases,
    sort_purchases,
)
from order_analytics.core.taxonomy import DEFAULT_TAXONOMY, load_taxonomy_from_file
from order_analytics.utils.config import get_settings
from order_analytics.utils.exceptions import OrderAnalyticsError
from order_analytics.utils.logger import configure_logging


def build_categorizer(taxonomy_file=None) -> ProductCategorizer:
    """Categorizer over the taxonomy file if given, else the built-in table"""
    if taxonomy_file:
        return ProductCategorizer(load_taxonomy_from_file(taxonomy_file))
    return ProductCategorizer(DEFAULT_TAXONOMY)


def print_report(summary: AnalyticsSummary, records: list):
    """Print the analytics summary as a readable report"""
    print("=" * 80)
    print("📦 AMAZON PURCHASE ANALYSIS")
    print("=" * 80)
    print(f"Orders: {len(records):,}")
    latest = latest_order_date(records)
    if latest:
        print(f"Latest order: {latest.isoformat()}")
    print(f"Total Spent: ${summary.total_spent:,.2f}")

    if not records:
        print("\n⚠️  No orders found")
        print("=" * 80)
        return

    print("\n📅 Monthly Spending:")
    for month, amount in summary.purchases_by_month.items():
        print(f"  • {month}  ${amount:>12,.2f}")

    print("\n📆 Yearly Spending by Category:")
    for year, total in summary.yearly_totals.items():
        print(f"  {year}  ${total:>12,.2f}")
        for category, amount in summary.yearly_category_totals[year].items():
            print(f"     • {category:<28} ${amount:>12,.2f}")

    print("\n🏷️  Spending by Category:")
    for category, amount in summary.categories.items():
        share = amount / summary.total_spent * 100 if summary.total_spent else 0.0
        print(f"  • {category:<28} ${amount:>12,.2f}  ({share:.1f}%)")

    print("\n📊 Purchase Amount Distribution:")
    for label in HISTOGRAM_LABELS:
        print(f"  • {label:<10} {summary.histogram.get(label, 0):>6,}")

    print("=" * 80)


def print_purchases(records: list, search: str, sort_column: str, descending: bool,
                    page: int, page_size: int):
    """Print one page of the purchases table"""
    rows = sort_purchases(search_purchases(records, search), sort_column, descending)
    page_rows, total_pages = paginate(rows, page, page_size)

    print(f"📋 Purchases: {len(rows):,} matching (page {page + 1} of {max(total_pages, 1)})")
    for record in page_rows:
        name = record[PRODUCT_NAME][:50]
        print(f"  • {record[ORDER_DATE][:10]:<10} | {name:<50} | ${record[TOTAL_OWED]:>9} | {record[ORDER_STATUS]}")


def main(argv=None):
    """Main CLI entry point"""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description='Spending analytics for an Amazon order history CSV',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report for the configured CSV (ORDER_HISTORY_CSV)
  order-analytics

  # JSON summary for a specific export
  order-analytics ~/Downloads/Retail.OrderHistory.1.csv --json

  # Search the purchases table, cheapest first
  order-analytics OrderHistory.csv --purchases --search cable --sort totalOwed --asc
        """
    )
    parser.add_argument('csv_file', nargs='?', default=str(settings.order_history_csv),
                        help=f'Order history CSV (default: {settings.order_history_csv})')
    parser.add_argument('--taxonomy', default=settings.taxonomy_file,
                        help='Taxonomy JSON file (default: built-in categories)')
    parser.add_argument('--json', action='store_true', help='Print the summary as JSON')
    parser.add_argument('--purchases', action='store_true', help='Show the purchases table instead')
    parser.add_argument('--search', default='', help='Filter purchases by product name')
    parser.add_argument('--sort', default=ORDER_DATE, choices=RECORD_FIELDS,
                        help='Purchases sort column (default: orderDate)')
    parser.add_argument('--asc', action='store_true', help='Sort ascending (default: descending)')
    parser.add_argument('--page', type=int, default=1, help='Page number, starting at 1')
    parser.add_argument('--page-size', type=int, default=DEFAULT_PAGE_SIZE, help='Rows per page')

    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    if args.page < 1 or args.page_size < 1:
        parser.error('--page and --page-size must be positive')

    try:
        records = read_order_history(Path(args.csv_file).expanduser())

        if args.purchases:
            print_purchases(records, args.search, args.sort, not args.asc,
                            args.page - 1, args.page_size)
            return 0

        categorizer = build_categorizer(args.taxonomy)
        summary = aggregate(records, categorizer)
    except OrderAnalyticsError as e:
        print(f"❌ Error: {e}")
        return 1

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_report(summary, records)

    return 0


if __name__ == "__main__":
    sys.exit(main())
