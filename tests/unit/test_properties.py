"""
Property-based tests using Hypothesis for the invoice analytics engine.

These tests check the partition and bound invariants of every component
over arbitrary invoice snapshots, plus normalizer totality over arbitrary
raw input.
"""

from datetime import date, timedelta

import hypothesis.strategies as st
from hypothesis import given, settings

from invoice_api.engine.client_ranking import rank_top_clients
from invoice_api.engine.monthly_series import build_monthly_series
from invoice_api.engine.normalizer import normalize_invoice
from invoice_api.engine.payment_score import compute_payment_score
from invoice_api.engine.risk_classifier import classify_risk
from invoice_api.engine.status_distribution import compute_status_distribution
from invoice_api.models.enums import InvoiceStatus, RiskTier
from invoice_api.models.invoices import InvoiceRecord
from tests.conftest import NOW, TODAY

# First day of the default six-month window ending in October 2026
WINDOW_START = date(2026, 5, 1)
WINDOW_END = date(2026, 10, 31)

amounts = st.floats(min_value=0.0, max_value=1_000_000.0, allow_nan=False, allow_infinity=False)
statuses = st.sampled_from(list(InvoiceStatus))
customers = st.sampled_from(["Acme", "Globex", "Initech", "Hooli", "Unknown", "Umbrella"])
any_dates = st.one_of(
    st.none(), st.dates(min_value=date(2024, 1, 1), max_value=date(2028, 12, 31))
)
window_dates = st.dates(min_value=WINDOW_START, max_value=WINDOW_END)


@st.composite
def invoice_records(draw, issue_dates=any_dates):
    return InvoiceRecord(
        id=str(draw(st.integers(min_value=0, max_value=10**6))),
        customer_name=draw(customers),
        total_amount=draw(amounts),
        status=draw(statuses),
        due_date=draw(any_dates),
        issue_date=draw(issue_dates),
    )


snapshots = st.lists(invoice_records(), max_size=40)


# =============================================================================
# Status Distribution
# =============================================================================


@given(invoices=snapshots)
@settings(max_examples=100)
def test_prop_status_distribution_exhaustive(invoices):
    """Every invoice lands in exactly one of Paid / Unpaid / Overdue."""
    dist = compute_status_distribution(invoices, NOW)
    assert dist.paid_count + dist.unpaid_count + dist.overdue_count == len(invoices)
    assert dist.total == len(invoices)
    assert dist.paid_count == sum(1 for i in invoices if i.status == InvoiceStatus.PAID)


# =============================================================================
# Monthly Series
# =============================================================================


@given(invoices=snapshots, window=st.integers(min_value=1, max_value=24))
@settings(max_examples=100)
def test_prop_monthly_series_length(invoices, window):
    """The series always has exactly window_months buckets."""
    assert len(build_monthly_series(invoices, NOW, window_months=window)) == window


@given(invoices=st.lists(invoice_records(issue_dates=st.one_of(st.none(), window_dates)), max_size=40))
@settings(max_examples=100)
def test_prop_monthly_series_conserves_dated_invoices(invoices):
    """Bucket counts sum to the number of invoices with an issue date in the window."""
    series = build_monthly_series(invoices, NOW)
    dated = [i for i in invoices if i.issue_date is not None]
    assert sum(b.invoice_count for b in series) == len(dated)
    assert sum(b.paid_count for b in series) == sum(
        1 for i in dated if i.status == InvoiceStatus.PAID
    )


@given(invoices=snapshots)
@settings(max_examples=100)
def test_prop_monthly_bucket_counts_consistent(invoices):
    """Paid and overdue counts never exceed a bucket's invoice count."""
    for bucket in build_monthly_series(invoices, NOW):
        assert bucket.paid_count + bucket.overdue_count <= bucket.invoice_count
        assert bucket.month_start <= bucket.month_end


# =============================================================================
# Payment Score
# =============================================================================


@given(invoices=snapshots)
@settings(max_examples=100)
def test_prop_payment_score_bounds(invoices):
    assert 0 <= compute_payment_score(invoices) <= 100


@given(invoices=snapshots)
@settings(max_examples=50)
def test_prop_payment_score_all_paid(invoices):
    paid = [i.model_copy(update={"status": InvoiceStatus.PAID}) for i in invoices]
    assert compute_payment_score(paid) == 100


@given(invoices=snapshots)
@settings(max_examples=50)
def test_prop_payment_score_none_paid(invoices):
    unpaid = [i.model_copy(update={"status": InvoiceStatus.UNPAID}) for i in invoices]
    expected = 100 if sum(i.total_amount for i in unpaid) == 0 else 0
    assert compute_payment_score(unpaid) == expected


# =============================================================================
# Client Ranking
# =============================================================================


@given(invoices=snapshots, n=st.integers(min_value=1, max_value=10))
@settings(max_examples=100)
def test_prop_top_clients_length_and_order(invoices, n):
    ranking = rank_top_clients(invoices, n=n)
    distinct = len({i.customer_name for i in invoices})
    assert len(ranking.clients) == min(distinct, n)
    amounts_ranked = [c.amount for c in ranking.clients]
    assert amounts_ranked == sorted(amounts_ranked, reverse=True)


@given(invoices=snapshots)
@settings(max_examples=100)
def test_prop_client_partition_conserves_counts(invoices):
    """With room for every client, the ranking partitions the snapshot."""
    ranking = rank_top_clients(invoices, n=50)
    assert sum(c.invoice_count for c in ranking.clients) == len(invoices)


# =============================================================================
# Risk Classifier
# =============================================================================


@given(
    days_low=st.integers(min_value=-400, max_value=400),
    days_high=st.integers(min_value=-400, max_value=400),
)
@settings(max_examples=100)
def test_prop_risk_tier_monotonic(days_low, days_high):
    """More days outstanding never yields a lower tier."""
    order = [RiskTier.LOW, RiskTier.MEDIUM, RiskTier.HIGH]
    low, high = sorted([days_low, days_high])
    tier_low = classify_risk(TODAY - timedelta(days=low), NOW).tier
    tier_high = classify_risk(TODAY - timedelta(days=high), NOW).tier
    assert order.index(tier_low) <= order.index(tier_high)


# =============================================================================
# Normalizer
# =============================================================================

raw_values = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(),
    st.text(max_size=30),
    st.dates().map(lambda d: d.isoformat()),
    st.dictionaries(st.just("name"), st.one_of(st.none(), st.text(max_size=10))),
)
raw_invoices = st.dictionaries(
    st.sampled_from(
        ["id", "customer", "customerName", "totalAmount", "status", "dueDate", "invoiceDate", "createdAt"]
    ),
    raw_values,
)


@given(raw=raw_invoices)
@settings(max_examples=200, deadline=None)
def test_prop_normalizer_is_total(raw):
    """Normalization never raises and always yields total required fields."""
    record = normalize_invoice(raw)
    assert record.customer_name
    assert record.total_amount >= 0.0
    assert record.total_amount == record.total_amount  # not NaN


huge_amounts = st.floats(min_value=0.0, max_value=1.7e308, allow_nan=False, allow_infinity=False)


@given(
    amounts_paid=st.lists(huge_amounts, max_size=10),
    amounts_open=st.lists(huge_amounts, max_size=10),
)
@settings(max_examples=100)
def test_prop_payment_score_bounds_at_float_limit(amounts_paid, amounts_open):
    """Amounts anywhere in the finite float range never break the score."""
    invoices = [
        InvoiceRecord(customer_name="Acme", total_amount=a, status=InvoiceStatus.PAID)
        for a in amounts_paid
    ] + [InvoiceRecord(customer_name="Acme", total_amount=a) for a in amounts_open]
    assert 0 <= compute_payment_score(invoices) <= 100
