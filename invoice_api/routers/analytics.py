"""
Invoice analytics router.

Wired to:
- InvoiceAnalyticsEngine for the full analytics panel
- classify_risk for single-invoice risk lookups

The dashboard posts the invoice snapshot it already fetched; nothing is
stored server-side. When the caller omits "now", it is resolved once per
request in the configured timezone and passed into the engine.
"""

from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter
from pydantic import BaseModel, Field

from invoice_api.config import get_settings
from invoice_api.engine.analytics import InvoiceAnalyticsEngine
from invoice_api.engine.normalizer import parse_date
from invoice_api.utils.logging import get_logger, log_event

logger = get_logger(__name__)
router = APIRouter()


class AnalyticsReportRequest(BaseModel):
    """Invoice snapshot and options for one analytics pass."""

    invoices: list[dict[str, Any]] = Field(default_factory=list)
    selected_invoice_id: Optional[str] = None
    now: Optional[datetime] = None
    window_months: Optional[int] = Field(default=None, ge=1, le=24)
    top_n: Optional[int] = Field(default=None, ge=1, le=50)


class RiskRequest(BaseModel):
    """Due date to classify."""

    due_date: Optional[str] = None
    now: Optional[datetime] = None


def resolve_now(now: Optional[datetime]) -> datetime:
    """Caller-supplied instant, or the wall clock in the configured timezone."""
    if now is not None:
        return now
    return datetime.now(ZoneInfo(get_settings().analytics_timezone))


@router.post("/report")
async def analytics_report(request: AnalyticsReportRequest):
    """
    Compute the analytics panel for an invoice snapshot.
    Returns payment score, risk, monthly series, top clients,
    status distribution, revenue summary and insights.
    """
    now = resolve_now(request.now)
    engine = InvoiceAnalyticsEngine.from_settings(
        get_settings(),
        window_months=request.window_months,
        top_clients_limit=request.top_n,
    )

    log_event(
        logger,
        "info",
        "analytics_report_requested",
        invoice_count=len(request.invoices),
        selected_invoice_id=request.selected_invoice_id,
        window_months=engine.window_months,
    )

    report = engine.build_report(
        request.invoices,
        now=now,
        selected_invoice_id=request.selected_invoice_id,
    )
    return {"success": True, "data": report.model_dump(mode="json")}


@router.post("/risk")
async def analytics_risk(request: RiskRequest):
    """Classify a single due date into a risk tier."""
    now = resolve_now(request.now)
    engine = InvoiceAnalyticsEngine.from_settings(get_settings())
    assessment = engine.assess_risk(parse_date(request.due_date), now)
    return {"success": True, "data": assessment.model_dump(mode="json")}
