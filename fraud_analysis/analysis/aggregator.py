"""Grouped statistics over the transaction store."""

from dataclasses import dataclass
from typing import List

from fraud_analysis.analysis.metrics import mean_or_none, percentage_or_zero, round_half_up
from fraud_analysis.models import CustomerAggregate, TransactionType
from fraud_analysis.store.transaction_store import TransactionStore


@dataclass(frozen=True)
class TypeSummary:
    """Volume statistics for one transaction type."""

    tx_type: TransactionType
    count: int
    percentage: float  # share of all transactions, 0-100
    average_amount: float
    total_volume: float


def summarize_by_type(store: TransactionStore) -> List[TypeSummary]:
    """
    Compute count, share, average amount and total volume per type.

    Args:
        store: The transaction set to aggregate.

    Returns:
        One TypeSummary per type present, ordered by count descending.
        An empty store yields an empty list.
    """
    df = store.to_dataframe()
    total_count = len(df)

    summaries: List[TypeSummary] = []
    for tx_type, group in df.groupby("type"):
        amounts = group["amount"]
        summaries.append(
            TypeSummary(
                tx_type=TransactionType(tx_type),
                count=len(group),
                percentage=percentage_or_zero(len(group), total_count, places=2),
                average_amount=mean_or_none(amounts, places=2) or 0.0,
                total_volume=round_half_up(float(amounts.sum()), 2),
            )
        )

    summaries.sort(key=lambda s: (-s.count, s.tx_type.value))
    return summaries


def aggregate_customers(store: TransactionStore) -> List[CustomerAggregate]:
    """
    Compute per-customer totals keyed by the originating customer id.

    Fraud columns count only rows marked isFraud; customers without fraud
    report zero for both.

    Returns:
        CustomerAggregate list ordered by customer id.
    """
    df = store.to_dataframe()
    if df.empty:
        return []

    df = df.assign(fraud_amount=df["amount"].where(df["is_fraud"].astype(bool), 0.0))
    grouped = df.groupby("origin_id", sort=True).agg(
        transaction_count=("amount", "size"),
        total_amount=("amount", "sum"),
        max_transaction=("amount", "max"),
        fraud_incident_count=("is_fraud", "sum"),
        fraud_total_amount=("fraud_amount", "sum"),
    )

    return [
        CustomerAggregate(
            customer_id=str(row.Index),
            transaction_count=int(row.transaction_count),
            total_amount=round_half_up(float(row.total_amount), 2),
            max_transaction=float(row.max_transaction),
            fraud_incident_count=int(row.fraud_incident_count),
            fraud_total_amount=round_half_up(float(row.fraud_total_amount), 2),
        )
        for row in grouped.itertuples()
    ]
