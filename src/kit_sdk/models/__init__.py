"""Response models shared across Kit resources."""

from .common import BulkOperationType, Pagination, with_bulk_type

__all__ = ["BulkOperationType", "Pagination", "with_bulk_type"]
