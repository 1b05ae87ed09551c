"""
Invoice Analytics Engine - one analytics pass over an invoice snapshot.

Normalizes the snapshot once, then runs every component against the same
records and the same evaluation instant:

    normalizer -> payment score, risk, monthly series, client ranking,
                  status distribution -> insights

The engine holds configuration only. It keeps no state between calls and
never reads the clock; callers pass "now" explicitly.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

import structlog

from invoice_api.config import Settings
from invoice_api.engine.client_ranking import DEFAULT_TOP_N, rank_top_clients
from invoice_api.engine.insights import DEFAULT_GOOD_PAYMENT_RATIO, compose_insights
from invoice_api.engine.monthly_series import DEFAULT_WINDOW_MONTHS, build_monthly_series
from invoice_api.engine.normalizer import UNKNOWN_CUSTOMER, normalize_invoices
from invoice_api.engine.payment_score import (
    SCORE_BAND_DESCRIPTIONS,
    compute_payment_score,
    score_band,
)
from invoice_api.engine.risk_classifier import (
    DEFAULT_LOW_MAX_DAYS,
    DEFAULT_MEDIUM_MAX_DAYS,
    classify_risk,
)
from invoice_api.engine.status_distribution import compute_status_distribution
from invoice_api.models.analytics import AnalyticsReport, RevenueSummary, RiskAssessment
from invoice_api.models.enums import InvoiceStatus, RiskTier
from invoice_api.models.invoices import InvoiceRecord

logger = structlog.get_logger()


class InvoiceAnalyticsEngine:
    """
    Computes the full analytics report for an invoice snapshot.

    Attributes:
        window_months: Buckets in the monthly series
        top_clients_limit: Clients kept in the revenue ranking
        low_max_days: Inclusive upper bound of the LOW risk tier
        medium_max_days: Inclusive upper bound of the MEDIUM risk tier
        excellent_threshold: Minimum payment score for EXCELLENT
        moderate_threshold: Minimum payment score for MODERATE
        good_payment_ratio: Paid share above which a client's history is good
        unknown_customer: Client name used when an invoice has none

    Example:
        >>> engine = InvoiceAnalyticsEngine()
        >>> report = engine.build_report(invoices, now=datetime(2026, 10, 19))
        >>> report.payment_score
        17
    """

    def __init__(
        self,
        window_months: int = DEFAULT_WINDOW_MONTHS,
        top_clients_limit: int = DEFAULT_TOP_N,
        low_max_days: int = DEFAULT_LOW_MAX_DAYS,
        medium_max_days: int = DEFAULT_MEDIUM_MAX_DAYS,
        excellent_threshold: int = 80,
        moderate_threshold: int = 50,
        good_payment_ratio: float = DEFAULT_GOOD_PAYMENT_RATIO,
        unknown_customer: str = UNKNOWN_CUSTOMER,
    ):
        if window_months < 1:
            raise ValueError(f"window_months must be >= 1, got {window_months}")
        if top_clients_limit < 1:
            raise ValueError(f"top_clients_limit must be >= 1, got {top_clients_limit}")
        if medium_max_days < low_max_days:
            raise ValueError("medium_max_days must be >= low_max_days")

        self.window_months = window_months
        self.top_clients_limit = top_clients_limit
        self.low_max_days = low_max_days
        self.medium_max_days = medium_max_days
        self.excellent_threshold = excellent_threshold
        self.moderate_threshold = moderate_threshold
        self.good_payment_ratio = good_payment_ratio
        self.unknown_customer = unknown_customer

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        window_months: Optional[int] = None,
        top_clients_limit: Optional[int] = None,
    ) -> "InvoiceAnalyticsEngine":
        """Build an engine from application settings, with optional overrides."""
        return cls(
            window_months=window_months or settings.analytics_window_months,
            top_clients_limit=top_clients_limit or settings.top_clients_limit,
            low_max_days=settings.risk_low_max_days,
            medium_max_days=settings.risk_medium_max_days,
            excellent_threshold=settings.score_excellent_threshold,
            moderate_threshold=settings.score_moderate_threshold,
            good_payment_ratio=settings.good_payment_ratio,
            unknown_customer=settings.unknown_customer_name,
        )

    def assess_risk(self, due_date: Optional[date], now: Union[datetime, date]) -> RiskAssessment:
        return classify_risk(
            due_date,
            now,
            low_max_days=self.low_max_days,
            medium_max_days=self.medium_max_days,
        )

    def build_report(
        self,
        raw_invoices: Iterable[Any],
        now: datetime,
        selected_invoice_id: Optional[str] = None,
    ) -> AnalyticsReport:
        """
        Run every analytics component over one snapshot.

        Args:
            raw_invoices: Invoice-like records (dicts, objects or InvoiceRecord)
            now: Evaluation instant shared by every component
            selected_invoice_id: Invoice being viewed; unknown ids act as no selection

        Returns:
            AnalyticsReport for the snapshot
        """
        invoices = normalize_invoices(raw_invoices, unknown_customer=self.unknown_customer)
        selected = self._find_selected(invoices, selected_invoice_id)

        score = compute_payment_score(invoices)
        band = score_band(score, self.excellent_threshold, self.moderate_threshold)

        if selected is not None:
            risk = self.assess_risk(selected.due_date, now)
            insights = compose_insights(selected, invoices, now, self.good_payment_ratio)
        else:
            risk = RiskAssessment(tier=RiskTier.NOT_APPLICABLE)
            insights = []

        report = AnalyticsReport(
            generated_at=now,
            invoice_count=len(invoices),
            selected_invoice_id=selected.id if selected is not None else None,
            payment_score=score,
            score_band=band,
            score_description=SCORE_BAND_DESCRIPTIONS[band],
            risk=risk,
            monthly_series=build_monthly_series(invoices, now, self.window_months),
            top_clients=rank_top_clients(
                invoices,
                n=self.top_clients_limit,
                selected_customer=selected.customer_name if selected is not None else None,
            ),
            status_distribution=compute_status_distribution(invoices, now),
            summary=summarize_revenue(invoices),
            insights=insights,
        )

        logger.info(
            "invoice_analytics_computed",
            invoice_count=report.invoice_count,
            payment_score=score,
            risk_tier=risk.tier.value,
            selected_invoice_id=report.selected_invoice_id,
        )

        return report

    @staticmethod
    def _find_selected(
        invoices: list[InvoiceRecord], selected_invoice_id: Optional[str]
    ) -> Optional[InvoiceRecord]:
        if not selected_invoice_id:
            return None
        for invoice in invoices:
            if invoice.id == selected_invoice_id:
                return invoice
        logger.warning("selected_invoice_not_found", selected_invoice_id=selected_invoice_id)
        return None


def summarize_revenue(invoices: Iterable[InvoiceRecord]) -> RevenueSummary:
    """Collected revenue and outstanding totals across the snapshot."""
    summary = RevenueSummary()
    for invoice in invoices:
        if invoice.status == InvoiceStatus.PAID:
            summary.total_revenue += invoice.total_amount
            summary.paid_invoice_count += 1
        else:
            summary.outstanding_amount += invoice.total_amount
            summary.outstanding_invoice_count += 1
    return summary
