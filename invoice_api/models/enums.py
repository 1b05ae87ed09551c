"""
Enumeration types for the invoice analytics engine.

All enums inherit from str to ensure JSON serialization compatibility.
"""

from enum import Enum


class InvoiceStatus(str, Enum):
    """
    Normalized invoice status.

    Upstream labels (DRAFT, SENT, PAID, OVERDUE, CANCELLED, ...) collapse into
    this closed set. OVERDUE is kept for display only; whether an invoice is
    overdue is always derived from its due date.
    """

    PAID = "paid"
    UNPAID = "unpaid"
    OVERDUE = "overdue"
    OTHER = "other"


class RiskTier(str, Enum):
    """Risk classification derived from days outstanding."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    NOT_APPLICABLE = "not_applicable"


class ScoreBand(str, Enum):
    """Qualitative band for a payment score."""

    EXCELLENT = "excellent"
    MODERATE = "moderate"
    NEEDS_ATTENTION = "needs_attention"


class InsightCategory(str, Enum):
    """Kinds of qualitative statements produced for a selected invoice."""

    PAYMENT_PATTERN = "payment_pattern"
    REVENUE_IMPACT = "revenue_impact"
    ACTION_REQUIRED = "action_required"
    FOLLOW_UP = "follow_up"
