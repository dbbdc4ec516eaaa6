"""Daily fraud report and the high-risk customer query."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from fraud_analysis.analysis.fraud_scorer import HighRiskCustomer, flag_high_risk_customers
from fraud_analysis.analysis.metrics import mean, round_half_up
from fraud_analysis.config import DAILY_REPORT_TOP_N, AnalysisConfig
from fraud_analysis.models import Transaction, TransactionType
from fraud_analysis.store.transaction_store import TransactionStore


@dataclass(frozen=True)
class DailyFraudTypeSummary:
    """Fraud count and average amount for one type on the report date."""

    tx_type: TransactionType
    total_fraud: int
    average_amount: float


@dataclass
class DailyFraudReport:
    """Fraud summary and largest fraudulent transactions for a single date."""

    report_date: date
    summary: List[DailyFraudTypeSummary] = field(default_factory=list)
    top_transactions: List[Transaction] = field(default_factory=list)

    @property
    def total_fraud(self) -> int:
        """Number of fraudulent transactions on the report date."""
        return sum(item.total_fraud for item in self.summary)

    @property
    def is_empty(self) -> bool:
        return self.total_fraud == 0


def generate_daily_fraud_report(
    store: TransactionStore,
    report_date: date,
    top_n: int = DAILY_REPORT_TOP_N,
) -> DailyFraudReport:
    """
    Build the fraud report for report_date.

    The summary and the top-N detail list are separate outputs of the same
    filtered set: fraudulent transactions whose timestamp falls on
    report_date.

    Args:
        store: The transaction set to report on.
        report_date: Calendar date to report.
        top_n: Number of largest fraudulent transactions to include.

    Returns:
        DailyFraudReport with the per-type summary ordered by type name and
        the top transactions ordered by amount descending.
    """
    daily_fraud = store.fraudulent().on_date(report_date)
    df = daily_fraud.to_dataframe()

    # groupby never yields an empty group, so mean() cannot raise here
    summary = [
        DailyFraudTypeSummary(
            tx_type=TransactionType(tx_type),
            total_fraud=len(group),
            average_amount=round_half_up(mean(group["amount"]), 0),
        )
        for tx_type, group in df.groupby("type", sort=True)
    ]
    top_transactions = sorted(daily_fraud, key=lambda tx: tx.amount, reverse=True)[:top_n]

    return DailyFraudReport(
        report_date=report_date,
        summary=summary,
        top_transactions=top_transactions,
    )


def high_risk_customers(
    store: TransactionStore, config: Optional[AnalysisConfig] = None
) -> List[HighRiskCustomer]:
    """
    Customers with repeated fraud, largest fraud total first.

    The minimum fraud count is config.HIGH_RISK_MIN_FRAUD_COUNT, three by
    default.
    """
    config = config or AnalysisConfig()
    return flag_high_risk_customers(store, min_fraud_count=config.HIGH_RISK_MIN_FRAUD_COUNT)
