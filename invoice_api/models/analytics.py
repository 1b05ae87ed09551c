"""
Analytics result models.

Every model here is an ephemeral view over one invoice snapshot and one
evaluation instant. Nothing is persisted; the presentation layer consumes
these through model_dump(mode="json").
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .enums import InsightCategory, RiskTier, ScoreBand


class RiskAssessment(BaseModel):
    """
    Risk tier for a single invoice.

    Attributes:
        tier: Discrete risk tier
        days_outstanding: Signed whole days past the due date (positive = overdue,
            zero or negative = days remaining); None when there is no due date
    """

    tier: RiskTier = Field(description="Risk tier")
    days_outstanding: Optional[int] = Field(
        default=None, description="Signed days past due date"
    )

    @computed_field
    @property
    def label(self) -> Optional[str]:
        if self.days_outstanding is None:
            return None
        if self.days_outstanding > 0:
            return f"{self.days_outstanding} days overdue"
        return f"{abs(self.days_outstanding)} days remaining"


class MonthBucket(BaseModel):
    """Invoice activity for one calendar month."""

    month_label: str = Field(description="Short month name, e.g. 'Oct'")
    full_label: str = Field(description="Month and year, e.g. 'Oct 2026'")
    month_start: date = Field(description="First day of the month")
    month_end: date = Field(description="Last day of the month")
    revenue: float = Field(default=0.0, ge=0.0, description="Paid amount issued in month")
    invoice_count: int = Field(default=0, ge=0, description="Invoices issued in month")
    paid_count: int = Field(default=0, ge=0, description="Paid invoices issued in month")
    overdue_count: int = Field(
        default=0, ge=0, description="Invoices issued in month that are overdue now"
    )


class ClientAggregate(BaseModel):
    """Revenue and volume for one client."""

    client_name: str = Field(description="Normalized client name")
    amount: float = Field(default=0.0, ge=0.0, description="Total invoiced amount")
    invoice_count: int = Field(default=0, ge=0, description="Number of invoices")
    is_selected: bool = Field(
        default=False, description="True for the selected invoice's client"
    )


class ClientRanking(BaseModel):
    """Top clients by invoiced amount."""

    clients: list[ClientAggregate] = Field(default_factory=list)
    total_clients: int = Field(default=0, ge=0, description="Distinct clients before truncation")
    selected_client: Optional[str] = Field(
        default=None, description="Selected client's name when it is in the ranking"
    )


class StatusDistribution(BaseModel):
    """
    Disjoint Paid / Unpaid / Overdue counts over one evaluation instant.

    paid_count + unpaid_count + overdue_count == total, always.
    """

    paid_count: int = Field(default=0, ge=0)
    unpaid_count: int = Field(default=0, ge=0)
    overdue_count: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    percentages: dict[str, int] = Field(
        default_factory=lambda: {"paid": 0, "unpaid": 0, "overdue": 0},
        description="Rounded share of each bucket",
    )


class Insight(BaseModel):
    """A human-readable statement about the selected invoice."""

    category: InsightCategory
    title: str
    text: str


class RevenueSummary(BaseModel):
    """Headline totals across the snapshot."""

    total_revenue: float = Field(default=0.0, ge=0.0, description="Sum of paid invoices")
    paid_invoice_count: int = Field(default=0, ge=0)
    outstanding_amount: float = Field(
        default=0.0, ge=0.0, description="Sum of invoices not yet paid"
    )
    outstanding_invoice_count: int = Field(default=0, ge=0)


class AnalyticsReport(BaseModel):
    """Everything the analytics panel shows for one snapshot."""

    generated_at: datetime = Field(description="Evaluation instant used for every component")
    invoice_count: int = Field(default=0, ge=0)
    selected_invoice_id: Optional[str] = Field(default=None)
    payment_score: int = Field(ge=0, le=100)
    score_band: ScoreBand
    score_description: str = Field(default="", description="Human-readable score band")
    risk: RiskAssessment
    monthly_series: list[MonthBucket] = Field(default_factory=list)
    top_clients: ClientRanking = Field(default_factory=ClientRanking)
    status_distribution: StatusDistribution = Field(default_factory=StatusDistribution)
    summary: RevenueSummary = Field(default_factory=RevenueSummary)
    insights: list[Insight] = Field(default_factory=list)
