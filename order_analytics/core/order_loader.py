"""
Order History Loader

Reads an Amazon order history CSV export into cleaned order records:
one dict per order line, every value a trimmed string.
"""
import csv
import math
from datetime import date, datetime
from pathlib import Path
from typing import Dict, IO, List, Mapping, Optional, Union

from order_analytics.utils.exceptions import SourceReadError
from order_analytics.utils.logger import get_logger

logger = get_logger(__name__)

OrderRecord = Dict[str, str]

ORDER_DATE = 'orderDate'
PRODUCT_NAME = 'productName'
TOTAL_OWED = 'totalOwed'
ORDER_STATUS = 'orderStatus'
SHIPMENT_STATUS = 'shipmentStatus'
TRACKING_INFO = 'trackingInfo'

# Export header -> record key
COLUMN_MAP = {
    'Order Date': ORDER_DATE,
    'Product Name': PRODUCT_NAME,
    'Total Owed': TOTAL_OWED,
    'Order Status': ORDER_STATUS,
    'Shipment Status': SHIPMENT_STATUS,
    'Carrier Name & Tracking Number': TRACKING_INFO,
}

RECORD_FIELDS = tuple(COLUMN_MAP.values())

# Columns the analytics cannot do without
REQUIRED_COLUMNS = ('Order Date', 'Product Name', 'Total Owed')

DATE_FORMATS = [
    '%m/%d/%Y',      # 01/30/2025
    '%m/%d/%y',      # 1/30/23
    '%Y/%m/%d',      # 2025/01/30
    '%B %d, %Y',     # January 30, 2025
    '%b %d, %Y',     # Jan 30, 2025
]


def parse_amount(amount_str: Optional[str]) -> Optional[float]:
    """
    Parse an amount string like "25.00" or "$1,024.99"

    Returns:
        The amount, or None when the text is empty, non-numeric or not finite
    """
    if not amount_str:
        return None

    # Remove dollar signs, commas
    cleaned = amount_str.replace('$', '').replace(',', '').strip()
    try:
        amount = float(cleaned)
    except ValueError:
        return None

    if not math.isfinite(amount):
        return None
    return amount


def parse_order_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse an order date (ISO date or timestamp, or a common US format)

    Timestamps keep the calendar date as written; no timezone conversion.

    Returns:
        The calendar date, or None if the text cannot be parsed
    """
    if not date_str:
        return None

    text = date_str.strip()
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def _clean(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _clean_header(name) -> str:
    return _clean(name).lstrip("\ufeff").strip().strip('"').strip()


def normalize_order_row(row: Mapping) -> OrderRecord:
    """
    Convert one CSV row (export headers) into an order record

    Header names and values are trimmed; missing cells become ''.
    Columns the analytics do not use are dropped.
    """
    trimmed = {_clean_header(key): _clean(value)
               for key, value in row.items() if key is not None}
    return {field: trimmed.get(column, '') for column, field in COLUMN_MAP.items()}


def _read_rows(f: IO[str], source_name: str) -> List[OrderRecord]:
    reader = csv.DictReader(f, skipinitialspace=True)

    if not reader.fieldnames:
        raise SourceReadError(f"No header row in {source_name}")

    headers = [_clean_header(h) for h in reader.fieldnames]
    missing = [col for col in REQUIRED_COLUMNS if col not in headers]
    if missing:
        raise SourceReadError(f"Missing required column(s) in {source_name}: {', '.join(missing)}")
    reader.fieldnames = headers

    records = []
    for row in reader:
        record = normalize_order_row(row)
        # Skip rows with no content at all (e.g. ",,,,")
        if not any(record.values()):
            continue
        records.append(record)

    return records


def read_order_history(source: Union[str, Path, IO[str]]) -> List[OrderRecord]:
    """
    Read an order history CSV

    Args:
        source: Path to the CSV file, or an open text stream

    Returns:
        List of order records

    Raises:
        SourceReadError: if the source cannot be opened, decoded or parsed as CSV,
            or its header lacks Order Date / Product Name / Total Owed
    """
    try:
        if isinstance(source, (str, Path)):
            csv_path = Path(source)
            logger.info("Reading order history from %s", csv_path)
            with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
                records = _read_rows(f, str(csv_path))
        else:
            records = _read_rows(source, getattr(source, 'name', '<stream>'))
    except FileNotFoundError as e:
        raise SourceReadError(f"CSV file not found: {source}") from e
    except UnicodeDecodeError as e:
        raise SourceReadError(f"Could not decode order history: {e}") from e
    except csv.Error as e:
        raise SourceReadError(f"Malformed CSV: {e}") from e
    except OSError as e:
        raise SourceReadError(f"Could not read order history: {e}") from e

    logger.info("Parsed %d order rows", len(records))
    return records
