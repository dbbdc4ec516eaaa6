"""Transaction storage and CSV ingestion."""

from fraud_analysis.store.loader import (
    DataQualityReport,
    TransactionLoader,
    check_data_quality,
    load_transactions,
)
from fraud_analysis.store.transaction_store import TransactionStore

__all__ = [
    "DataQualityReport",
    "TransactionLoader",
    "TransactionStore",
    "check_data_quality",
    "load_transactions",
]
