"""Parameterised fraud reports."""

from fraud_analysis.reports.daily_report import (
    DailyFraudReport,
    DailyFraudTypeSummary,
    generate_daily_fraud_report,
    high_risk_customers,
)

__all__ = [
    "DailyFraudReport",
    "DailyFraudTypeSummary",
    "generate_daily_fraud_report",
    "high_risk_customers",
]
