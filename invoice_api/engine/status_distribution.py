"""
Status Distribution Classifier.

Splits a snapshot into three disjoint buckets over one evaluation instant:

- Paid: status is PAID
- Overdue: not paid, due date present and strictly before now
- Unpaid: everything else, including invoices without a due date

Every invoice lands in exactly one bucket, so the counts always sum to the
snapshot size.
"""

from datetime import date, datetime
from typing import Iterable, Union

from invoice_api.engine.payment_score import percentage
from invoice_api.engine.risk_classifier import is_overdue
from invoice_api.models.analytics import StatusDistribution
from invoice_api.models.enums import InvoiceStatus
from invoice_api.models.invoices import InvoiceRecord


def compute_status_distribution(
    invoices: Iterable[InvoiceRecord],
    now: Union[datetime, date],
) -> StatusDistribution:
    """Count paid, unpaid and overdue invoices as of now."""
    paid = unpaid = overdue = 0
    for invoice in invoices:
        if invoice.status == InvoiceStatus.PAID:
            paid += 1
        elif is_overdue(invoice, now):
            overdue += 1
        else:
            unpaid += 1

    total = paid + unpaid + overdue
    return StatusDistribution(
        paid_count=paid,
        unpaid_count=unpaid,
        overdue_count=overdue,
        total=total,
        percentages={
            "paid": percentage(paid, total),
            "unpaid": percentage(unpaid, total),
            "overdue": percentage(overdue, total),
        },
    )
