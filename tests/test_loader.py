"""Tests for CSV ingestion and data-quality checks."""

import io
from pathlib import Path

import pandas as pd
import pytest

from fraud_analysis.errors import IngestionError, ValidationError
from fraud_analysis.models import TransactionType
from fraud_analysis.store.loader import (
    TransactionLoader,
    check_data_quality,
    load_transactions,
)

HEADER = (
    "step,type,amount,nameOrig,oldbalanceOrg,newbalanceOrig,"
    "nameDest,oldbalanceDest,newbalanceDest,isFraud,isFlaggedFraud"
)
VALID_ROWS = [
    "1,PAYMENT,9839.64,C1231006815,170136.0,160296.36,M1979787155,0.0,0.0,0,0",
    "1,TRANSFER,181.0,C1305486145,181.0,0.0,C553264065,0.0,0.0,1,0",
    "1,CASH_OUT,181.0,C840083671,181.0,0.0,C38997010,21182.0,0.0,1,0",
]


def _csv(*rows: str, header: str = HEADER) -> io.StringIO:
    return io.StringIO("\n".join([header, *rows]) + "\n")


class TestLoadValid:
    """Tests for successful loads."""

    def test_loads_all_rows(self) -> None:
        store = load_transactions(_csv(*VALID_ROWS))

        assert len(store) == 3
        assert [tx.type for tx in store] == [
            TransactionType.PAYMENT,
            TransactionType.TRANSFER,
            TransactionType.CASH_OUT,
        ]
        assert len(store.fraudulent()) == 2

    def test_loads_optional_timestamp_column(self) -> None:
        source = _csv(
            VALID_ROWS[0] + ",2024-01-01 08:15:00",
            VALID_ROWS[1] + ",",
            header=HEADER + ",transaction_date",
        )
        store = load_transactions(source)

        first, second = store.transactions
        assert first.hour == 8
        assert second.timestamp is not None

    def test_loads_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "transactions.csv"
        path.write_text(_csv(*VALID_ROWS).getvalue())

        store = TransactionLoader(path).load()
        assert len(store) == 3

    def test_header_only_file_gives_empty_store(self) -> None:
        store = load_transactions(_csv())
        assert len(store) == 0


class TestLoadInvalid:
    """Tests for rejected input."""

    def test_rejects_every_bad_row_with_row_number(self) -> None:
        """Assert all offending rows are reported, not just the first."""
        source = _csv(
            VALID_ROWS[0],
            "1,PAYMENT,-5.0,C100,10.0,15.0,M1,0.0,0.0,0,0",
            VALID_ROWS[1],
            "1,WIRE,50.0,C200,10.0,0.0,M1,0.0,0.0,0,0",
        )

        with pytest.raises(IngestionError) as exc_info:
            load_transactions(source)

        errors = exc_info.value.errors
        assert [error.row_number for error in errors] == [2, 4]
        assert errors[0].field == "amount"
        assert errors[0].customer_id == "C100"
        assert errors[1].field == "type"
        assert all(isinstance(error, ValidationError) for error in errors)

    def test_rejects_invalid_flag(self) -> None:
        source = _csv("1,PAYMENT,5.0,C1,10.0,5.0,M1,0.0,0.0,3,0")

        with pytest.raises(IngestionError) as exc_info:
            load_transactions(source)

        assert exc_info.value.errors[0].field == "isFraud"
        assert "row 1" in str(exc_info.value.errors[0])

    @pytest.mark.parametrize("amount", ["inf", "nan"])
    def test_rejects_non_finite_amount(self, amount: str) -> None:
        source = _csv(VALID_ROWS[0], f"1,TRANSFER,{amount},C9,10.0,0.0,C8,0.0,0.0,0,0")

        with pytest.raises(IngestionError) as exc_info:
            load_transactions(source)

        errors = exc_info.value.errors
        assert [(error.row_number, error.field) for error in errors] == [(2, "amount")]
        assert errors[0].customer_id == "C9"

    def test_rejects_yes_and_off_flags(self) -> None:
        source = _csv("1,PAYMENT,5.0,C1,10.0,5.0,M1,0.0,0.0,yes,off")

        with pytest.raises(IngestionError) as exc_info:
            load_transactions(source)

        assert [error.field for error in exc_info.value.errors] == ["isFraud", "isFlaggedFraud"]

    def test_accepts_true_false_flags(self) -> None:
        store = load_transactions(_csv("1,TRANSFER,5.0,C1,10.0,5.0,C2,0.0,0.0,true,false"))

        tx = store.transactions[0]
        assert tx.is_fraud is True
        assert tx.is_flagged_fraud is False

    def test_ingestion_error_is_a_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            load_transactions(_csv("1,PAYMENT,0,C1,10.0,5.0,M1,0.0,0.0,0,0"))

    def test_missing_column(self) -> None:
        header = HEADER.replace(",isFlaggedFraud", "")
        with pytest.raises(IngestionError, match="isFlaggedFraud"):
            load_transactions(_csv("1,PAYMENT,5.0,C1,10.0,5.0,M1,0.0,0.0,0", header=header))

    def test_missing_file_propagates_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_transactions(tmp_path / "does_not_exist.csv")


class TestDataQuality:
    """Tests for the data-quality summary."""

    def test_counts_violations(self) -> None:
        frame = pd.DataFrame(
            {
                "type": ["PAYMENT", "WIRE", "CASH_IN", "DEBIT"],
                "amount": ["10", "0", "-3", "x"],
                "oldbalanceOrg": ["5", "-1", "0", "2"],
                "isFraud": ["0", "1", "2", "0"],
                "isFlaggedFraud": ["0", "0", "0", ""],
            }
        )

        report = check_data_quality(frame)

        assert report.total_rows == 4
        assert report.invalid_amounts == 3
        assert report.negative_old_balance_orig == 1
        assert report.invalid_types == 1
        assert report.invalid_flags == 2
        assert not report.is_clean

    def test_clean_frame(self) -> None:
        frame = pd.read_csv(_csv(*VALID_ROWS), dtype=str, keep_default_na=False)
        assert check_data_quality(frame).is_clean

    def test_non_finite_amounts_counted(self) -> None:
        frame = pd.DataFrame(
            {
                "type": ["PAYMENT", "PAYMENT", "PAYMENT"],
                "amount": ["inf", "nan", "12.5"],
                "oldbalanceOrg": ["5", "5", "5"],
                "isFraud": ["0", "0", "0"],
                "isFlaggedFraud": ["0", "0", "0"],
            }
        )
        assert check_data_quality(frame).invalid_amounts == 2

    def test_flag_spellings_match_the_model(self) -> None:
        """true/false count as valid, like the loader; yes/off do not."""
        frame = pd.DataFrame(
            {
                "type": ["PAYMENT", "PAYMENT"],
                "amount": ["1", "1"],
                "oldbalanceOrg": ["5", "5"],
                "isFraud": ["true", "yes"],
                "isFlaggedFraud": ["False", "off"],
            }
        )
        assert check_data_quality(frame).invalid_flags == 2
