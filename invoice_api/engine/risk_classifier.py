"""
Risk Classifier - maps days outstanding onto a discrete risk tier.

Days outstanding is the signed number of whole calendar days between the
due date and the evaluation date: positive once the due date has passed,
zero on the due date, negative while it is still ahead.

Tiers (boundaries belong to the lower tier):
- days <= 15        -> LOW
- 15 < days <= 45   -> MEDIUM
- days > 45         -> HIGH
- no due date       -> NOT_APPLICABLE

The same due-date arithmetic defines "overdue" for every other component:
an invoice is overdue when it is not paid and its due date is strictly
before the evaluation date. The stored OVERDUE label is not consulted.
"""

from datetime import date, datetime
from typing import Optional, Union

from invoice_api.models.analytics import RiskAssessment
from invoice_api.models.enums import InvoiceStatus, RiskTier
from invoice_api.models.invoices import InvoiceRecord

DEFAULT_LOW_MAX_DAYS = 15
DEFAULT_MEDIUM_MAX_DAYS = 45


def evaluation_date(now: Union[datetime, date]) -> date:
    """Calendar date of the evaluation instant."""
    if isinstance(now, datetime):
        return now.date()
    return now


def days_outstanding(due_date: Optional[date], now: Union[datetime, date]) -> Optional[int]:
    """Signed whole days from due_date to now; None without a due date."""
    if due_date is None:
        return None
    return (evaluation_date(now) - due_date).days


def is_overdue(invoice: InvoiceRecord, now: Union[datetime, date]) -> bool:
    """True when the invoice is unpaid and its due date has passed."""
    if invoice.status == InvoiceStatus.PAID or invoice.due_date is None:
        return False
    return invoice.due_date < evaluation_date(now)


def classify_risk(
    due_date: Optional[date],
    now: Union[datetime, date],
    low_max_days: int = DEFAULT_LOW_MAX_DAYS,
    medium_max_days: int = DEFAULT_MEDIUM_MAX_DAYS,
) -> RiskAssessment:
    """
    Classify an invoice's risk from its due date.

    Args:
        due_date: Invoice due date, or None
        now: Evaluation instant
        low_max_days: Inclusive upper bound of the LOW tier
        medium_max_days: Inclusive upper bound of the MEDIUM tier

    Returns:
        RiskAssessment with tier and signed days outstanding
    """
    days = days_outstanding(due_date, now)
    if days is None:
        return RiskAssessment(tier=RiskTier.NOT_APPLICABLE)

    if days <= low_max_days:
        tier = RiskTier.LOW
    elif days <= medium_max_days:
        tier = RiskTier.MEDIUM
    else:
        tier = RiskTier.HIGH

    return RiskAssessment(tier=tier, days_outstanding=days)
