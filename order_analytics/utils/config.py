"""
Runtime configuration

Settings come from environment variables, optionally loaded from a .env file.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv


# Load environment variables
load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values"""
    order_history_csv: Path
    taxonomy_file: Optional[Path]
    log_level: str
    log_file: Optional[Path]


def get_settings(
    order_history_csv: Optional[str] = None,
    taxonomy_file: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None
) -> Settings:
    """
    Build settings from environment variables or provided values

    Args:
        order_history_csv: Order history CSV path (default: from ORDER_HISTORY_CSV env var)
        taxonomy_file: Taxonomy JSON path (default: from TAXONOMY_FILE env var)
        log_level: Logging level name (default: from LOG_LEVEL env var)
        log_file: Rotating log file path (default: from LOG_FILE env var)

    Returns:
        Settings object
    """
    taxonomy = taxonomy_file or os.getenv('TAXONOMY_FILE', '')
    logfile = log_file or os.getenv('LOG_FILE', '')

    return Settings(
        order_history_csv=Path(order_history_csv or os.getenv('ORDER_HISTORY_CSV', 'OrderHistory.csv')),
        taxonomy_file=Path(taxonomy) if taxonomy else None,
        log_level=(log_level or os.getenv('LOG_LEVEL', 'INFO')).upper(),
        log_file=Path(logfile) if logfile else None,
    )
