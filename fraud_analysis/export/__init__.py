"""CSV export of report results."""

from fraud_analysis.export.csv_exporter import (
    CUSTOMER_SEGMENT_COLUMNS,
    FRAUD_PATTERN_COLUMNS,
    export_customer_segments,
    export_fraud_patterns,
    export_rows,
    export_transactions,
    read_customer_segments,
)

__all__ = [
    "CUSTOMER_SEGMENT_COLUMNS",
    "FRAUD_PATTERN_COLUMNS",
    "export_customer_segments",
    "export_fraud_patterns",
    "export_rows",
    "export_transactions",
    "read_customer_segments",
]
