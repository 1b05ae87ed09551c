"""
Invoice analytics engine components.

- normalizer: raw invoice -> InvoiceRecord
- payment_score: collected share of invoiced value
- risk_classifier: days outstanding -> risk tier, derived overdue rule
- monthly_series: trailing calendar-month buckets
- client_ranking: top clients by invoiced amount
- status_distribution: Paid / Unpaid / Overdue partition
- insights: qualitative statements about the selected invoice
- analytics: facade running all of the above for one snapshot

Every component is a pure function of its inputs and an explicit
evaluation instant.
"""

__all__ = [
    "InvoiceAnalyticsEngine",
    "build_monthly_series",
    "classify_risk",
    "compose_insights",
    "compute_payment_score",
    "compute_status_distribution",
    "is_overdue",
    "normalize_invoice",
    "normalize_invoices",
    "rank_top_clients",
]

from invoice_api.engine.analytics import InvoiceAnalyticsEngine
from invoice_api.engine.client_ranking import rank_top_clients
from invoice_api.engine.insights import compose_insights
from invoice_api.engine.monthly_series import build_monthly_series
from invoice_api.engine.normalizer import normalize_invoice, normalize_invoices
from invoice_api.engine.payment_score import compute_payment_score
from invoice_api.engine.risk_classifier import classify_risk, is_overdue
from invoice_api.engine.status_distribution import compute_status_distribution
