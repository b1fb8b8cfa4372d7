"""Utility modules."""
from .config import Settings, get_settings
from .exceptions import OrderAnalyticsError, SourceReadError, TaxonomyError
from .logger import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "OrderAnalyticsError",
    "SourceReadError",
    "TaxonomyError",
    "configure_logging",
    "get_logger",
]
