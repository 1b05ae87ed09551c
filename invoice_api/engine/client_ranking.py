"""
Client Ranking Aggregator - top clients by invoiced amount.

Groups invoices by normalized client name, sums amounts and counts, and
ranks clients by amount descending. Python's sort is stable, so clients
with equal amounts keep the order in which they first appear in the
snapshot.
"""

from typing import Iterable, Optional

from invoice_api.models.analytics import ClientAggregate, ClientRanking
from invoice_api.models.invoices import InvoiceRecord

DEFAULT_TOP_N = 5


def aggregate_clients(invoices: Iterable[InvoiceRecord]) -> list[ClientAggregate]:
    """Per-client totals in first-appearance order."""
    clients: dict[str, ClientAggregate] = {}
    for invoice in invoices:
        entry = clients.get(invoice.customer_name)
        if entry is None:
            entry = ClientAggregate(client_name=invoice.customer_name)
            clients[invoice.customer_name] = entry
        entry.amount += invoice.total_amount
        entry.invoice_count += 1
    return list(clients.values())


def rank_top_clients(
    invoices: Iterable[InvoiceRecord],
    n: int = DEFAULT_TOP_N,
    selected_customer: Optional[str] = None,
) -> ClientRanking:
    """
    Rank the top N clients by invoiced amount.

    Args:
        invoices: Normalized invoice records
        n: Maximum number of clients to return (>= 1)
        selected_customer: Client of the selected invoice, flagged in the output

    Returns:
        ClientRanking with at most n clients, sorted by amount descending

    Raises:
        ValueError: If n < 1
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")

    clients = aggregate_clients(invoices)
    ranked = sorted(clients, key=lambda c: -c.amount)[:n]

    selected_client = None
    for client in ranked:
        if selected_customer is not None and client.client_name == selected_customer:
            client.is_selected = True
            selected_client = client.client_name

    return ClientRanking(
        clients=ranked,
        total_clients=len(clients),
        selected_client=selected_client,
    )
