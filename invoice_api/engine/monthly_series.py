"""
Time-Bucketed Aggregator - trailing calendar-month invoice series.

Partitions invoices by issue date into the N calendar months ending with
the month of the evaluation instant. The series always has exactly N
buckets, oldest first; months without invoices are zero-filled.

Per bucket:
- revenue: sum of paid invoice totals issued in the month
- invoice_count / paid_count: invoices (any status / paid) issued in the month
- overdue_count: invoices issued in the month that are overdue as of now

Invoices without an issue date are left out of every bucket. They still
count everywhere else (score, status distribution, client ranking).
"""

import calendar
from datetime import date, datetime
from typing import Iterable, Union

import structlog

from invoice_api.engine.risk_classifier import evaluation_date, is_overdue
from invoice_api.models.analytics import MonthBucket
from invoice_api.models.enums import InvoiceStatus
from invoice_api.models.invoices import InvoiceRecord

logger = structlog.get_logger()

DEFAULT_WINDOW_MONTHS = 6


def trailing_months(today: date, window_months: int) -> list[tuple[int, int]]:
    """(year, month) pairs for the window ending with today's month, oldest first."""
    months = []
    year, month = today.year, today.month
    for _ in range(window_months):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    months.reverse()
    return months


def _empty_bucket(year: int, month: int) -> MonthBucket:
    start = date(year, month, 1)
    end = date(year, month, calendar.monthrange(year, month)[1])
    return MonthBucket(
        month_label=start.strftime("%b"),
        full_label=start.strftime("%b %Y"),
        month_start=start,
        month_end=end,
    )


def build_monthly_series(
    invoices: Iterable[InvoiceRecord],
    now: Union[datetime, date],
    window_months: int = DEFAULT_WINDOW_MONTHS,
) -> list[MonthBucket]:
    """
    Build the trailing monthly series.

    Args:
        invoices: Normalized invoice records
        now: Evaluation instant; its month is the last bucket
        window_months: Number of buckets (>= 1)

    Returns:
        Exactly window_months MonthBucket entries, oldest first

    Raises:
        ValueError: If window_months < 1
    """
    if window_months < 1:
        raise ValueError(f"window_months must be >= 1, got {window_months}")

    today = evaluation_date(now)
    months = trailing_months(today, window_months)
    buckets = {key: _empty_bucket(*key) for key in months}

    skipped = 0
    for invoice in invoices:
        if invoice.issue_date is None:
            skipped += 1
            continue
        bucket = buckets.get((invoice.issue_date.year, invoice.issue_date.month))
        if bucket is None:
            continue

        bucket.invoice_count += 1
        if invoice.status == InvoiceStatus.PAID:
            bucket.paid_count += 1
            bucket.revenue += invoice.total_amount
        if is_overdue(invoice, today):
            bucket.overdue_count += 1

    if skipped:
        logger.debug("monthly_series_undated_invoices", count=skipped)

    return [buckets[key] for key in months]
