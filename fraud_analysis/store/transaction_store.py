"""In-memory, immutable store of validated transactions."""

from datetime import date
from typing import Iterable, Iterator, List, Tuple

import pandas as pd

from fraud_analysis.models import Transaction, TransactionType

FRAME_COLUMNS: List[str] = [
    "step",
    "type",
    "amount",
    "origin_id",
    "old_balance_orig",
    "new_balance_orig",
    "dest_id",
    "old_balance_dest",
    "new_balance_dest",
    "is_fraud",
    "is_flagged_fraud",
    "timestamp",
    "hour",
    "date",
]


class TransactionStore:
    """
    Holds the transaction set every analysis component reads from.

    The store is immutable: filtering methods return new stores and the
    underlying records are frozen pydantic models.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._transactions: Tuple[Transaction, ...] = tuple(transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __bool__(self) -> bool:
        return bool(self._transactions)

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def fraudulent(self) -> "TransactionStore":
        """Return a store of the rows marked isFraud."""
        return TransactionStore(tx for tx in self._transactions if tx.is_fraud)

    def of_types(self, *tx_types: TransactionType) -> "TransactionStore":
        """Return a store restricted to the given transaction types."""
        wanted = set(tx_types)
        return TransactionStore(tx for tx in self._transactions if tx.type in wanted)

    def on_date(self, report_date: date) -> "TransactionStore":
        """Return a store of the rows whose timestamp falls on report_date."""
        return TransactionStore(
            tx for tx in self._transactions if tx.timestamp.date() == report_date
        )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the store to a DataFrame with one row per transaction.

        Enum values are flattened to their string form and derived ``hour``
        and ``date`` columns are added for time-based grouping. An empty
        store yields an empty frame that still carries every column.
        """
        if not self._transactions:
            return pd.DataFrame(columns=FRAME_COLUMNS)

        records = []
        for tx in self._transactions:
            record = tx.model_dump()
            record["type"] = tx.type.value
            record["hour"] = tx.timestamp.hour
            record["date"] = tx.timestamp.date()
            records.append(record)
        return pd.DataFrame(records, columns=FRAME_COLUMNS)
