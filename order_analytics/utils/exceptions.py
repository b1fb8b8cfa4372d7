"""Custom exception classes for Order Analytics."""


class OrderAnalyticsError(Exception):
    """Base exception for Order Analytics."""
    pass


class SourceReadError(OrderAnalyticsError):
    """The order history source could not be read or decoded at all."""
    pass


class TaxonomyError(OrderAnalyticsError):
    """Taxonomy configuration is missing or malformed."""
    pass
