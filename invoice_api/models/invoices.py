"""
Invoice record model.

InvoiceRecord is the strictly typed shape every analytics component works
on. It is produced only by the normalizer, which guarantees that required
fields are total, so downstream code never re-checks them.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import InvoiceStatus


class InvoiceRecord(BaseModel):
    """
    Normalized, immutable invoice record.

    Attributes:
        id: Opaque identifier, unique within a snapshot
        customer_name: Grouping identity; "Unknown" when the source had none
        total_amount: Finite, non-negative monetary value
        status: Normalized status label (display-only for OVERDUE)
        due_date: Due date, absent when missing or unparseable
        issue_date: Invoice or creation date used for monthly bucketing
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Opaque invoice identifier")
    customer_name: str = Field(min_length=1, description="Client name used for grouping")
    total_amount: float = Field(default=0.0, ge=0.0, description="Invoice total")
    status: InvoiceStatus = Field(
        default=InvoiceStatus.OTHER, description="Normalized status label"
    )
    due_date: Optional[date] = Field(default=None, description="Payment due date")
    issue_date: Optional[date] = Field(
        default=None, description="Invoice date, falling back to creation date"
    )
