"""
Payment Score Calculator.

The payment score is the share of invoiced value that has been collected,
as an integer percentage. A snapshot with no invoiced value scores 100:
nothing was billed, so nothing is outstanding.

Sums and ratios are carried in Decimal so that amounts near the float
limit cannot overflow and decimal halves (0.57 of 2.00 is 28.5%) round
the way they read.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

from invoice_api.models.enums import InvoiceStatus, ScoreBand
from invoice_api.models.invoices import InvoiceRecord

Number = Union[int, float, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Decimal with the value's shortest decimal spelling (0.57 -> Decimal('0.57'))."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(repr(value))


def decimal_sum(values: Iterable[Number]) -> Decimal:
    return sum((to_decimal(v) for v in values), Decimal(0))


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(to_decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def percentage(part: Number, whole: Number) -> int:
    """Integer percentage of part over whole; 0 when whole is 0 or not finite."""
    part, whole = to_decimal(part), to_decimal(whole)
    if whole == 0 or not (part.is_finite() and whole.is_finite()):
        return 0
    return round_half_up(100 * part / whole)


def compute_payment_score(invoices: Iterable[InvoiceRecord]) -> int:
    """
    Compute the payment score for a set of invoices.

    Args:
        invoices: Normalized invoice records

    Returns:
        round(100 * paid value / total value), or 100 if total value is 0
    """
    paid_value = Decimal(0)
    total_value = Decimal(0)
    for invoice in invoices:
        amount = to_decimal(invoice.total_amount)
        total_value += amount
        if invoice.status == InvoiceStatus.PAID:
            paid_value += amount

    if total_value == 0:
        return 100
    return min(100, percentage(paid_value, total_value))


def score_band(
    score: int,
    excellent_threshold: int = 80,
    moderate_threshold: int = 50,
) -> ScoreBand:
    """Classify a payment score into a qualitative band."""
    if score >= excellent_threshold:
        return ScoreBand.EXCELLENT
    if score >= moderate_threshold:
        return ScoreBand.MODERATE
    return ScoreBand.NEEDS_ATTENTION


SCORE_BAND_DESCRIPTIONS = {
    ScoreBand.EXCELLENT: "Excellent payment history",
    ScoreBand.MODERATE: "Moderate payment history",
    ScoreBand.NEEDS_ATTENTION: "Needs attention",
}
