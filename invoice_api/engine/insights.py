"""
Insight Composer - qualitative statements about the selected invoice.

Formatting only: every number shown here is a ratio or average over the
selected client's invoices. Ratios over an empty client history or a zero
revenue total report 0 instead of failing.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Union

from invoice_api.engine.payment_score import decimal_sum, percentage
from invoice_api.engine.risk_classifier import is_overdue
from invoice_api.models.analytics import Insight
from invoice_api.models.enums import InsightCategory, InvoiceStatus
from invoice_api.models.invoices import InvoiceRecord

DEFAULT_GOOD_PAYMENT_RATIO = 0.7


def _payment_pattern(
    selected: InvoiceRecord, client_invoices: list[InvoiceRecord], good_ratio: float
) -> Insight:
    paid = sum(1 for inv in client_invoices if inv.status == InvoiceStatus.PAID)
    ratio = paid / len(client_invoices) if client_invoices else 0.0
    quality = "good" if ratio > good_ratio else "concerning"
    return Insight(
        category=InsightCategory.PAYMENT_PATTERN,
        title="Payment Pattern Analysis",
        text=(
            f"{selected.customer_name} has a {quality} payment history with "
            f"{percentage(paid, len(client_invoices))}% of invoices paid on time."
        ),
    )


def _revenue_impact(selected: InvoiceRecord, client_invoices: list[InvoiceRecord]) -> Insight:
    client_total = decimal_sum(inv.total_amount for inv in client_invoices)
    average = client_total / len(client_invoices) if client_invoices else Decimal(0)
    return Insight(
        category=InsightCategory.REVENUE_IMPACT,
        title="Revenue Impact",
        text=(
            f"This invoice represents {percentage(selected.total_amount, client_total)}% "
            f"of total revenue from {selected.customer_name}, with an average invoice "
            f"value of ${average:,.2f}."
        ),
    )


def compose_insights(
    selected: InvoiceRecord,
    invoices: Iterable[InvoiceRecord],
    now: Union[datetime, date],
    good_ratio: float = DEFAULT_GOOD_PAYMENT_RATIO,
) -> list[Insight]:
    """
    Compose insights for the selected invoice.

    Args:
        selected: The invoice being viewed
        invoices: Full snapshot; the selected client's history is taken from it
        now: Evaluation instant
        good_ratio: Paid share above which the client's history reads as good

    Returns:
        Payment pattern and revenue impact insights, followed by an action
        or follow-up recommendation when the invoice is still open
    """
    client_invoices = [inv for inv in invoices if inv.customer_name == selected.customer_name]

    insights = [
        _payment_pattern(selected, client_invoices, good_ratio),
        _revenue_impact(selected, client_invoices),
    ]

    if is_overdue(selected, now):
        insights.append(
            Insight(
                category=InsightCategory.ACTION_REQUIRED,
                title="Action Required",
                text=(
                    "This invoice is overdue. Consider sending a payment reminder or "
                    "contacting the client directly to resolve payment delays."
                ),
            )
        )
    elif selected.due_date is not None and selected.status in (
        InvoiceStatus.UNPAID,
        InvoiceStatus.OVERDUE,
    ):
        insights.append(
            Insight(
                category=InsightCategory.FOLLOW_UP,
                title="Follow-up Recommended",
                text=(
                    "Invoice is approaching due date. Consider sending a friendly "
                    "reminder to ensure timely payment."
                ),
            )
        )

    return insights
