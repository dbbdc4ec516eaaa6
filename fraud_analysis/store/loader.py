"""CSV ingestion: data-quality summary and per-row validation."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Dict, List, Union

import numpy as np
import pandas as pd
import pydantic

from fraud_analysis.errors import IngestionError, ValidationError
from fraud_analysis.models import BINARY_FLAG_VALUES, Transaction, TransactionType
from fraud_analysis.store.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

# PaySim header; TIMESTAMP_COLUMN is optional and defaults to ingestion time
REQUIRED_COLUMNS: List[str] = [
    "step",
    "type",
    "amount",
    "nameOrig",
    "oldbalanceOrg",
    "newbalanceOrig",
    "nameDest",
    "oldbalanceDest",
    "newbalanceDest",
    "isFraud",
    "isFlaggedFraud",
]
TIMESTAMP_COLUMN: str = "transaction_date"

Source = Union[str, Path, IO[str]]


@dataclass(frozen=True)
class DataQualityReport:
    """Counts of rows that break each data invariant."""

    total_rows: int
    invalid_amounts: int
    negative_old_balance_orig: int
    invalid_types: int
    invalid_flags: int

    @property
    def is_clean(self) -> bool:
        return not (
            self.invalid_amounts
            or self.negative_old_balance_orig
            or self.invalid_types
            or self.invalid_flags
        )


def check_data_quality(frame: pd.DataFrame) -> DataQualityReport:
    """
    Summarize invariant violations over a raw (unvalidated) frame.

    Non-numeric and non-finite amounts count as invalid amounts; a flag is
    invalid unless it is one of the spellings the Transaction model accepts.
    """
    amounts = pd.to_numeric(frame["amount"], errors="coerce").astype(float)
    old_balances = pd.to_numeric(frame["oldbalanceOrg"], errors="coerce")
    valid_types = {tx_type.value for tx_type in TransactionType}

    invalid_flags = 0
    for column in ("isFraud", "isFlaggedFraud"):
        flags = frame[column].astype(str).str.strip().str.lower()
        invalid_flags += int((~flags.isin(list(BINARY_FLAG_VALUES))).sum())

    valid_amounts = (amounts > 0) & np.isfinite(amounts)
    return DataQualityReport(
        total_rows=len(frame),
        invalid_amounts=int((~valid_amounts).sum()),
        negative_old_balance_orig=int((old_balances < 0).sum()),
        invalid_types=int((~frame["type"].isin(valid_types)).sum()),
        invalid_flags=invalid_flags,
    )


class TransactionLoader:
    """
    Loads a PaySim-format CSV into a TransactionStore.

    The whole source is read before any analysis begins. Every row is
    validated; if any row fails, an IngestionError listing each offending
    row is raised and no store is returned.
    """

    def __init__(self, source: Source) -> None:
        """
        Initialize the loader.

        Args:
            source: Path to a CSV file, or an open text stream.
        """
        self.source = source

    def load(self) -> TransactionStore:
        """
        Read, validate and return the transaction set.

        Raises:
            IngestionError: If columns are missing or any row is invalid.
            OSError: If the source cannot be opened.
        """
        frame = self._read_frame()
        self._check_columns(frame)

        report = check_data_quality(frame)
        logger.info(
            "Data quality: %d rows, %d invalid amounts, %d negative origin balances, "
            "%d invalid types, %d invalid flags",
            report.total_rows,
            report.invalid_amounts,
            report.negative_old_balance_orig,
            report.invalid_types,
            report.invalid_flags,
        )

        transactions: List[Transaction] = []
        errors: List[ValidationError] = []

        for row_number, record in enumerate(frame.to_dict(orient="records"), start=1):
            try:
                transactions.append(Transaction.model_validate(record))
            except pydantic.ValidationError as exc:
                errors.extend(self._row_errors(row_number, record, exc))

        if errors:
            for error in errors:
                logger.error("Rejected %s", error)
            raise IngestionError(errors)

        logger.info("Loaded %d transactions", len(transactions))
        return TransactionStore(transactions)

    def _read_frame(self) -> pd.DataFrame:
        # Keep raw text so pydantic sees exactly what the file holds
        try:
            return pd.read_csv(self.source, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError as exc:
            raise IngestionError([], "source has no header row") from exc

    @staticmethod
    def _check_columns(frame: pd.DataFrame) -> None:
        missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            raise IngestionError([], f"missing required columns: {', '.join(missing)}")

    @staticmethod
    def _row_errors(
        row_number: int, record: Dict[str, Any], exc: pydantic.ValidationError
    ) -> List[ValidationError]:
        """Convert a pydantic error into one ValidationError per failing field."""
        customer_id = record.get("nameOrig") or None
        return [
            ValidationError(
                error["msg"],
                row_number=row_number,
                field=".".join(str(part) for part in error["loc"]) or None,
                customer_id=customer_id,
            )
            for error in exc.errors()
        ]


def load_transactions(source: Source) -> TransactionStore:
    """Load and validate a transaction CSV from a path or text stream."""
    return TransactionLoader(source).load()
