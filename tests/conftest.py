"""
Pytest configuration and shared fixtures for the invoice analytics test suite.

Provides raw-invoice and InvoiceRecord factories, a fixed evaluation
instant, and the FastAPI test client.
"""

import os
from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient

# Quiet logging BEFORE importing app
os.environ.setdefault("LOG_LEVEL", "warning")

from invoice_api.models.enums import InvoiceStatus
from invoice_api.models.invoices import InvoiceRecord

# Fixed evaluation instant shared by every test
NOW = datetime(2026, 10, 19, 14, 30)
TODAY = NOW.date()


def days_ago(days: int) -> date:
    """Calendar date `days` before TODAY (negative = in the future)."""
    return TODAY - timedelta(days=days)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

_counter = {"value": 0}


def _next_id() -> str:
    _counter["value"] += 1
    return f"INV-{_counter['value']:05d}"


def make_raw_invoice(
    customer: Optional[str] = "Acme Corp",
    total_amount=1500.0,
    status: Optional[str] = "SENT",
    due_date: Optional[date] = None,
    invoice_date: Optional[date] = None,
    **overrides,
) -> dict:
    """Factory for raw invoices shaped like the upstream API's JSON."""
    raw = {
        "id": _next_id(),
        "customer": {"name": customer} if customer is not None else None,
        "totalAmount": total_amount,
        "status": status,
        "dueDate": due_date.isoformat() if due_date else None,
        "invoiceDate": invoice_date.isoformat() if invoice_date else None,
        "createdAt": None,
    }
    raw.update(overrides)
    return raw


def make_record(
    customer_name: str = "Acme Corp",
    total_amount: float = 1500.0,
    status: InvoiceStatus = InvoiceStatus.UNPAID,
    due_date: Optional[date] = None,
    issue_date: Optional[date] = None,
    **overrides,
) -> InvoiceRecord:
    """Factory for normalized InvoiceRecord objects."""
    defaults = dict(
        id=_next_id(),
        customer_name=customer_name,
        total_amount=total_amount,
        status=status,
        due_date=due_date,
        issue_date=issue_date,
    )
    defaults.update(overrides)
    return InvoiceRecord(**defaults)


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def three_invoices():
    """
    Reference scenario:
    A paid 100 due 30 days ago, B unpaid 200 due in 5 days,
    C unpaid 300 due 20 days ago.
    """
    return {
        "A": make_record(
            customer_name="Alpha",
            total_amount=100.0,
            status=InvoiceStatus.PAID,
            due_date=days_ago(30),
            issue_date=days_ago(60),
            id="A",
        ),
        "B": make_record(
            customer_name="Beta",
            total_amount=200.0,
            status=InvoiceStatus.UNPAID,
            due_date=days_ago(-5),
            issue_date=days_ago(25),
            id="B",
        ),
        "C": make_record(
            customer_name="Gamma",
            total_amount=300.0,
            status=InvoiceStatus.UNPAID,
            due_date=days_ago(20),
            issue_date=days_ago(50),
            id="C",
        ),
    }


@pytest.fixture
def sample_raw_invoices():
    """Mixed raw snapshot across clients, statuses and months."""
    return [
        make_raw_invoice("Acme Corp", 1200.0, "PAID", days_ago(40), days_ago(70), id="r1"),
        make_raw_invoice("Acme Corp", 800.0, "SENT", days_ago(10), days_ago(40), id="r2"),
        make_raw_invoice("Globex", 5000.0, "PAID", days_ago(5), days_ago(35), id="r3"),
        make_raw_invoice("Globex", 2500.0, "OVERDUE", days_ago(60), days_ago(90), id="r4"),
        make_raw_invoice("Initech", 300.0, "DRAFT", None, days_ago(3), id="r5"),
        make_raw_invoice(None, "not-a-number", "SENT", days_ago(-10), None, id="r6"),
    ]


@pytest.fixture
def client():
    """FastAPI test client for integration tests."""
    from invoice_api.main import app

    with TestClient(app) as c:
        yield c
