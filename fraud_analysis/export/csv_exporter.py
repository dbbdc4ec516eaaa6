"""Delimited-text export of analysis results."""

import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Iterable, List, Sequence, Union

import pandas as pd

from fraud_analysis.analysis.fraud_scorer import FraudPatternRow
from fraud_analysis.models import CustomerSegment, Segment
from fraud_analysis.store.loader import REQUIRED_COLUMNS, TIMESTAMP_COLUMN
from fraud_analysis.store.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

CUSTOMER_SEGMENT_COLUMNS: List[str] = ["customerId", "segment", "totalAmount"]
FRAUD_PATTERN_COLUMNS: List[str] = ["type", "hour", "amount", "oldBalanceOrig", "newBalanceOrig"]

Destination = Union[str, Path, IO[str]]


def export_rows(
    rows: Iterable[Sequence[object]],
    columns: Sequence[str],
    destination: Destination,
) -> int:
    """
    Write a header row followed by one delimited row per result.

    The full text is rendered before anything is written. File destinations
    are written to a temporary file beside the target and moved into place
    only once complete, so a failed export never leaves a partial file.

    Args:
        rows: Result rows, each with one value per column.
        columns: Header names.
        destination: File path, or an open text stream / in-memory buffer.

    Returns:
        Number of data rows written.

    Raises:
        OSError: If the destination cannot be written.
    """
    frame = pd.DataFrame(list(rows), columns=list(columns))
    text = frame.to_csv(index=False, lineterminator="\n")

    if isinstance(destination, (str, Path)):
        _write_atomic(Path(destination), text)
        logger.info("Exported %d rows to %s", len(frame), destination)
    else:
        destination.write(text)
        logger.debug("Exported %d rows to stream", len(frame))
    return len(frame)


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def export_customer_segments(
    segments: Iterable[CustomerSegment], destination: Destination
) -> int:
    """Write customerId, segment, totalAmount for each customer."""
    rows = (
        (customer.customer_id, customer.segment.value, customer.total_amount)
        for customer in segments
    )
    return export_rows(rows, CUSTOMER_SEGMENT_COLUMNS, destination)


def export_fraud_patterns(
    patterns: Iterable[FraudPatternRow], destination: Destination
) -> int:
    """Write type, hour, amount and origin balances for each fraudulent transaction."""
    rows = (
        (row.tx_type.value, row.hour, row.amount, row.old_balance_orig, row.new_balance_orig)
        for row in patterns
    )
    return export_rows(rows, FRAUD_PATTERN_COLUMNS, destination)


def export_transactions(store: TransactionStore, destination: Destination) -> int:
    """Write the store back out in the PaySim source layout, with timestamps."""
    rows = (
        (
            tx.step,
            tx.type.value,
            tx.amount,
            tx.origin_id,
            tx.old_balance_orig,
            tx.new_balance_orig,
            tx.dest_id,
            tx.old_balance_dest,
            tx.new_balance_dest,
            int(tx.is_fraud),
            int(tx.is_flagged_fraud),
            tx.timestamp.isoformat(sep=" "),
        )
        for tx in store
    )
    return export_rows(rows, REQUIRED_COLUMNS + [TIMESTAMP_COLUMN], destination)


def read_customer_segments(source: Union[str, Path, IO[str]]) -> List[CustomerSegment]:
    """Load a file produced by export_customer_segments."""
    frame = pd.read_csv(
        source, dtype={"customerId": str, "segment": str}, keep_default_na=False
    )
    return [
        CustomerSegment(
            customer_id=row.customerId,
            segment=Segment(row.segment),
            total_amount=float(row.totalAmount),
        )
        for row in frame.itertuples(index=False)
    ]
