"""Rule-based fraud statistics and anomaly flags."""

from dataclasses import dataclass
from typing import List, Optional

from fraud_analysis.analysis.metrics import mean_or_none, percentage_or_zero, round_half_up
from fraud_analysis.config import DISCREPANCY_TOLERANCE, HIGH_RISK_MIN_FRAUD_COUNT
from fraud_analysis.models import Transaction, TransactionType
from fraud_analysis.store.transaction_store import TransactionStore

# Only these types debit the originating account in full
DISCREPANCY_TYPES = (TransactionType.CASH_OUT, TransactionType.TRANSFER)


@dataclass(frozen=True)
class FraudRate:
    """Share of fraudulent transactions within one type."""

    tx_type: TransactionType
    total_count: int
    fraud_count: int
    fraud_rate: float  # percentage, 0-100
    average_fraud_amount: Optional[float]  # None when the type has no fraud


@dataclass(frozen=True)
class FraudPattern:
    """Average shape of fraudulent transactions of one type."""

    tx_type: TransactionType
    fraud_count: int
    average_amount: float
    average_balance_change: float
    average_old_balance_orig: float


@dataclass(frozen=True)
class HourlyFraudTrend:
    """Fraud statistics for one hour of the day."""

    hour: int
    total_transactions: int
    fraud_count: int
    fraud_rate: float


@dataclass(frozen=True)
class BalanceDiscrepancy:
    """A transaction whose recorded origin balance does not add up."""

    origin_id: str
    tx_type: TransactionType
    step: int
    amount: float
    old_balance_orig: float
    new_balance_orig: float
    expected_balance: float
    discrepancy: float


@dataclass(frozen=True)
class HighRiskCustomer:
    """A customer with repeated fraudulent activity."""

    customer_id: str
    fraud_count: int
    fraud_total_amount: float


@dataclass(frozen=True)
class FraudPatternRow:
    """One fraudulent transaction as written to the fraud patterns export."""

    tx_type: TransactionType
    hour: int
    amount: float
    old_balance_orig: float
    new_balance_orig: float


def fraud_rate_by_type(store: TransactionStore) -> List[FraudRate]:
    """
    Compute the fraud rate and average fraud amount for each type.

    The fraud rate is ``fraud / total * 100`` rounded to three places. The
    average fraud amount covers fraudulent rows only and is None, not zero,
    for a type without fraud.

    Returns:
        FraudRate list ordered by fraud rate descending.
    """
    df = store.to_dataframe()

    rates: List[FraudRate] = []
    for tx_type, group in df.groupby("type"):
        fraud_amounts = group.loc[group["is_fraud"].astype(bool), "amount"]
        rates.append(
            FraudRate(
                tx_type=TransactionType(tx_type),
                total_count=len(group),
                fraud_count=len(fraud_amounts),
                fraud_rate=percentage_or_zero(len(fraud_amounts), len(group), places=3),
                average_fraud_amount=mean_or_none(fraud_amounts, places=0),
            )
        )
    rates.sort(key=lambda r: (-r.fraud_rate, r.tx_type.value))
    return rates


def fraud_patterns_by_type(store: TransactionStore) -> List[FraudPattern]:
    """Average amount, origin balance change and prior origin balance of fraud, per type."""
    df = store.fraudulent().to_dataframe()
    df = df.assign(balance_change=df["new_balance_orig"] - df["old_balance_orig"])

    return [
        FraudPattern(
            tx_type=TransactionType(tx_type),
            fraud_count=len(group),
            average_amount=mean_or_none(group["amount"], places=0),
            average_balance_change=mean_or_none(group["balance_change"], places=0),
            average_old_balance_orig=mean_or_none(group["old_balance_orig"], places=0),
        )
        for tx_type, group in df.groupby("type", sort=True)
    ]


def hourly_fraud_trends(store: TransactionStore) -> List[HourlyFraudTrend]:
    """
    Compute the fraud rate for each hour of the day.

    Returns:
        HourlyFraudTrend list ordered by fraud rate descending, then hour.
    """
    df = store.to_dataframe()
    if df.empty:
        return []

    grouped = df.groupby("hour").agg(
        total=("is_fraud", "size"),
        frauds=("is_fraud", "sum"),
    )
    trends = [
        HourlyFraudTrend(
            hour=int(row.Index),
            total_transactions=int(row.total),
            fraud_count=int(row.frauds),
            fraud_rate=percentage_or_zero(int(row.frauds), int(row.total), places=2),
        )
        for row in grouped.itertuples()
    ]
    trends.sort(key=lambda t: (-t.fraud_rate, t.hour))
    return trends


def balance_discrepancy(tx: Transaction) -> float:
    """Recorded minus expected origin balance after tx, to the cent."""
    expected_balance = tx.old_balance_orig - tx.amount
    return round_half_up(tx.new_balance_orig - expected_balance, 2)


def find_balance_discrepancies(
    store: TransactionStore,
    tolerance: float = DISCREPANCY_TOLERANCE,
) -> List[BalanceDiscrepancy]:
    """
    Flag CASH_OUT and TRANSFER transactions whose balances do not add up.

    A transaction is flagged when ``abs(discrepancy) > tolerance``.

    Args:
        store: The transaction set to scan.
        tolerance: Allowed absolute drift, in currency units.

    Returns:
        BalanceDiscrepancy list in store order.
    """
    flagged: List[BalanceDiscrepancy] = []
    for tx in store.of_types(*DISCREPANCY_TYPES):
        discrepancy = balance_discrepancy(tx)
        if abs(discrepancy) > tolerance:
            flagged.append(
                BalanceDiscrepancy(
                    origin_id=tx.origin_id,
                    tx_type=tx.type,
                    step=tx.step,
                    amount=tx.amount,
                    old_balance_orig=tx.old_balance_orig,
                    new_balance_orig=tx.new_balance_orig,
                    expected_balance=round_half_up(tx.old_balance_orig - tx.amount, 2),
                    discrepancy=discrepancy,
                )
            )
    return flagged


def flag_high_risk_customers(
    store: TransactionStore,
    min_fraud_count: int = HIGH_RISK_MIN_FRAUD_COUNT,
) -> List[HighRiskCustomer]:
    """
    Find customers with at least min_fraud_count fraudulent transactions.

    Returns:
        HighRiskCustomer list ordered by fraud total amount descending.
    """
    df = store.fraudulent().to_dataframe()
    if df.empty:
        return []

    grouped = df.groupby("origin_id").agg(
        fraud_count=("amount", "size"),
        fraud_total_amount=("amount", "sum"),
    )
    customers = [
        HighRiskCustomer(
            customer_id=str(row.Index),
            fraud_count=int(row.fraud_count),
            fraud_total_amount=round_half_up(float(row.fraud_total_amount), 2),
        )
        for row in grouped.itertuples()
        if row.fraud_count >= min_fraud_count
    ]
    customers.sort(key=lambda c: (-c.fraud_total_amount, c.customer_id))
    return customers


def fraud_pattern_rows(store: TransactionStore) -> List[FraudPatternRow]:
    """Project each fraudulent transaction onto the fraud patterns export columns."""
    return [
        FraudPatternRow(
            tx_type=tx.type,
            hour=tx.hour,
            amount=tx.amount,
            old_balance_orig=tx.old_balance_orig,
            new_balance_orig=tx.new_balance_orig,
        )
        for tx in store.fraudulent()
    ]
