"""Tests for the daily fraud report and the high-risk query."""

from datetime import date, datetime

import pytest

from fraud_analysis.config import AnalysisConfig
from fraud_analysis.models import TransactionType
from fraud_analysis.reports.daily_report import generate_daily_fraud_report, high_risk_customers
from fraud_analysis.store.transaction_store import TransactionStore

REPORT_DATE = date(2024, 1, 15)


@pytest.fixture
def store(make_transaction) -> TransactionStore:
    on_day = datetime(2024, 1, 15, 9, 0)
    transactions = [
        make_transaction(
            type=TransactionType.TRANSFER if i % 2 else TransactionType.CASH_OUT,
            amount=1000.0 * (i + 1),
            origin_id=f"C{i}",
            is_fraud=True,
            timestamp=on_day,
        )
        for i in range(12)
    ]
    # Non-fraud on the same day and fraud on other days must be ignored
    transactions.append(make_transaction(amount=999_999.0, timestamp=on_day))
    transactions.append(
        make_transaction(amount=888_888.0, is_fraud=True, timestamp=datetime(2024, 1, 14, 23, 59))
    )
    transactions.append(
        make_transaction(amount=777_777.0, is_fraud=True, timestamp=datetime(2024, 1, 16, 0, 0))
    )
    return TransactionStore(transactions)


class TestDailyFraudReport:
    """Tests for generate_daily_fraud_report."""

    def test_summary_per_type(self, store: TransactionStore) -> None:
        report = generate_daily_fraud_report(store, REPORT_DATE)
        summary = {s.tx_type: s for s in report.summary}

        assert report.report_date == REPORT_DATE
        assert report.total_fraud == 12
        assert summary[TransactionType.CASH_OUT].total_fraud == 6
        assert summary[TransactionType.TRANSFER].total_fraud == 6
        # CASH_OUT: 1000, 3000, ..., 11000 -> 6000
        assert summary[TransactionType.CASH_OUT].average_amount == 6000.0
        assert summary[TransactionType.TRANSFER].average_amount == 7000.0

    def test_top_transactions(self, store: TransactionStore) -> None:
        report = generate_daily_fraud_report(store, REPORT_DATE)
        amounts = [tx.amount for tx in report.top_transactions]

        assert len(amounts) == 10
        assert amounts == sorted(amounts, reverse=True)
        assert amounts[0] == 12_000.0
        assert all(tx.is_fraud for tx in report.top_transactions)

    def test_custom_top_n(self, store: TransactionStore) -> None:
        report = generate_daily_fraud_report(store, REPORT_DATE, top_n=3)
        assert [tx.amount for tx in report.top_transactions] == [12_000.0, 11_000.0, 10_000.0]

    def test_day_without_fraud(self, store: TransactionStore) -> None:
        report = generate_daily_fraud_report(store, date(2023, 6, 1))

        assert report.is_empty
        assert report.summary == []
        assert report.top_transactions == []


class TestHighRiskQuery:
    """Tests for the parameterless high-risk query."""

    def test_uses_three_fraud_minimum(self, make_transaction) -> None:
        store = TransactionStore(
            [make_transaction(origin_id="C_A", is_fraud=True) for _ in range(3)]
            + [make_transaction(origin_id="C_B", is_fraud=True) for _ in range(2)]
        )

        assert [c.customer_id for c in high_risk_customers(store)] == ["C_A"]

    def test_minimum_comes_from_config(self, make_transaction) -> None:
        store = TransactionStore(
            [make_transaction(origin_id="C_A", is_fraud=True) for _ in range(3)]
            + [make_transaction(origin_id="C_B", is_fraud=True) for _ in range(2)]
        )
        config = AnalysisConfig(HIGH_RISK_MIN_FRAUD_COUNT=2)

        assert [c.customer_id for c in high_risk_customers(store, config)] == ["C_A", "C_B"]
