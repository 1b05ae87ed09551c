"""
Pydantic v2 data models for the invoice analytics engine.

Model Organization:
    - enums: Status, risk tier, score band and insight categories
    - invoices: Normalized InvoiceRecord
    - analytics: Result models (risk, monthly buckets, client ranking,
      status distribution, insights, full report)

Usage:
    >>> from invoice_api.models import InvoiceRecord, InvoiceStatus
    >>> record = InvoiceRecord(
    ...     id="INV-001",
    ...     customer_name="Acme",
    ...     total_amount=100.0,
    ...     status=InvoiceStatus.PAID,
    ... )
"""

from .analytics import (
    AnalyticsReport,
    ClientAggregate,
    ClientRanking,
    Insight,
    MonthBucket,
    RevenueSummary,
    RiskAssessment,
    StatusDistribution,
)
from .enums import InsightCategory, InvoiceStatus, RiskTier, ScoreBand
from .invoices import InvoiceRecord

__all__ = [
    "AnalyticsReport",
    "ClientAggregate",
    "ClientRanking",
    "Insight",
    "InsightCategory",
    "InvoiceRecord",
    "InvoiceStatus",
    "MonthBucket",
    "RevenueSummary",
    "RiskAssessment",
    "RiskTier",
    "ScoreBand",
    "StatusDistribution",
]
