"""
Invoice Record Normalizer - single validation boundary for raw invoices.

Raw invoices arrive from the upstream CRUD API with optional, loosely typed
fields (camelCase JSON, nested customer objects, string dates). This module
turns each one into an InvoiceRecord whose required fields are total:

- total_amount: finite and non-negative, else 0.0
- customer_name: non-empty, else "Unknown"
- status: mapped case-insensitively onto InvoiceStatus
- due_date / issue_date: parsed calendar dates, else absent

Normalization never raises. Bad values degrade to defaults and are logged
at debug level so data quality problems stay visible without failing the
analytics pass.
"""

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

import structlog

from invoice_api.models.enums import InvoiceStatus
from invoice_api.models.invoices import InvoiceRecord

logger = structlog.get_logger()

UNKNOWN_CUSTOMER = "Unknown"

STATUS_ALIASES = {
    "paid": InvoiceStatus.PAID,
    "sent": InvoiceStatus.UNPAID,
    "pending": InvoiceStatus.UNPAID,
    "unpaid": InvoiceStatus.UNPAID,
    "overdue": InvoiceStatus.OVERDUE,
}

ID_FIELDS = ("id", "invoice_id", "invoiceId")
CUSTOMER_NAME_FIELDS = ("customerName", "customer_name")
AMOUNT_FIELDS = ("totalAmount", "total_amount")
DUE_DATE_FIELDS = ("dueDate", "due_date")
ISSUE_DATE_FIELDS = ("invoiceDate", "invoice_date", "issueDate", "issue_date")
CREATED_AT_FIELDS = ("createdAt", "created_at")


def _get(raw: Any, name: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def _first(raw: Any, names: Iterable[str]) -> Any:
    """Return the first non-empty value among the candidate field names."""
    for name in names:
        value = _get(raw, name)
        if value is not None and value != "":
            return value
    return None


def parse_amount(value: Any) -> Optional[float]:
    """
    Parse a monetary value.

    Returns:
        Finite non-negative float, or None if the value is missing or invalid
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    elif not isinstance(value, (int, float, Decimal)):
        return None

    try:
        amount = float(value)
    except (ValueError, OverflowError):
        return None

    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        return None
    return amount


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a calendar date.

    Accepts date and datetime objects, ISO dates (YYYY-MM-DD) and ISO
    datetimes (with or without 'Z' / offset). A datetime keeps the calendar
    date it was written with; no timezone conversion is applied.

    Returns:
        Parsed date or None if the value is missing or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        if "T" in text or " " in text:
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError:
        return None


def normalize_status(value: Any) -> InvoiceStatus:
    """Map an upstream status label onto InvoiceStatus."""
    if isinstance(value, InvoiceStatus):
        return value
    if not isinstance(value, str):
        return InvoiceStatus.OTHER
    return STATUS_ALIASES.get(value.strip().lower(), InvoiceStatus.OTHER)


def _customer_name(raw: Any) -> Optional[str]:
    name = _first(raw, CUSTOMER_NAME_FIELDS)
    if name is None:
        customer = _get(raw, "customer")
        if customer is not None:
            name = _get(customer, "name")
    if not isinstance(name, str) or not name.strip():
        return None
    return name


def normalize_invoice(raw: Any, unknown_customer: str = UNKNOWN_CUSTOMER) -> InvoiceRecord:
    """
    Normalize one raw invoice into an InvoiceRecord.

    Args:
        raw: Mapping or attribute object as returned by the upstream API
        unknown_customer: Client name used when the invoice has none

    Returns:
        InvoiceRecord with total required fields
    """
    if isinstance(raw, InvoiceRecord):
        return raw

    invoice_id = _first(raw, ID_FIELDS)
    invoice_id = "" if invoice_id is None else str(invoice_id)

    defaulted = []

    customer_name = _customer_name(raw)
    if customer_name is None:
        customer_name = unknown_customer
        defaulted.append("customer_name")

    raw_amount = _first(raw, AMOUNT_FIELDS)
    amount = parse_amount(raw_amount)
    if amount is None:
        amount = 0.0
        defaulted.append("total_amount")

    raw_due = _first(raw, DUE_DATE_FIELDS)
    due_date = parse_date(raw_due)
    if raw_due is not None and due_date is None:
        defaulted.append("due_date")

    # invoiceDate wins over createdAt, even when only createdAt parses
    raw_issue = _first(raw, ISSUE_DATE_FIELDS)
    if raw_issue is None:
        raw_issue = _first(raw, CREATED_AT_FIELDS)
    issue_date = parse_date(raw_issue)
    if raw_issue is not None and issue_date is None:
        defaulted.append("issue_date")

    if defaulted:
        logger.debug(
            "invoice_field_defaulted",
            invoice_id=invoice_id,
            fields=defaulted,
        )

    return InvoiceRecord(
        id=invoice_id,
        customer_name=customer_name,
        total_amount=amount,
        status=normalize_status(_get(raw, "status")),
        due_date=due_date,
        issue_date=issue_date,
    )


def normalize_invoices(
    raws: Iterable[Any], unknown_customer: str = UNKNOWN_CUSTOMER
) -> list[InvoiceRecord]:
    """Normalize a snapshot, preserving input order."""
    return [normalize_invoice(raw, unknown_customer=unknown_customer) for raw in raws]
