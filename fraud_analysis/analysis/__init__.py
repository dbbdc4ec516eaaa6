"""Aggregation, segmentation and fraud scoring over a transaction store."""

from fraud_analysis.analysis.aggregator import TypeSummary, aggregate_customers, summarize_by_type
from fraud_analysis.analysis.fraud_scorer import (
    BalanceDiscrepancy,
    FraudPattern,
    FraudPatternRow,
    FraudRate,
    HighRiskCustomer,
    HourlyFraudTrend,
    balance_discrepancy,
    find_balance_discrepancies,
    flag_high_risk_customers,
    fraud_pattern_rows,
    fraud_patterns_by_type,
    fraud_rate_by_type,
    hourly_fraud_trends,
)
from fraud_analysis.analysis.segmentation import (
    SegmentSummary,
    classify_segment,
    segment_customers,
    summarize_segments,
)

__all__ = [
    "BalanceDiscrepancy",
    "FraudPattern",
    "FraudPatternRow",
    "FraudRate",
    "HighRiskCustomer",
    "HourlyFraudTrend",
    "SegmentSummary",
    "TypeSummary",
    "aggregate_customers",
    "balance_discrepancy",
    "classify_segment",
    "find_balance_discrepancies",
    "flag_high_risk_customers",
    "fraud_pattern_rows",
    "fraud_patterns_by_type",
    "fraud_rate_by_type",
    "hourly_fraud_trends",
    "segment_customers",
    "summarize_by_type",
    "summarize_segments",
]
