"""API routers for all endpoints."""

from invoice_api.routers import analytics

__all__ = ["analytics"]
