"""Tests for the transaction record model."""

from datetime import datetime, timezone

import pydantic
import pytest

from fraud_analysis.models import Transaction, TransactionType

PAYSIM_ROW = {
    "step": "1",
    "type": "TRANSFER",
    "amount": "181.00",
    "nameOrig": "C1305486145",
    "oldbalanceOrg": "181.00",
    "newbalanceOrig": "0.00",
    "nameDest": "C553264065",
    "oldbalanceDest": "0.00",
    "newbalanceDest": "0.00",
    "isFraud": "1",
    "isFlaggedFraud": "0",
}


class TestTransactionParsing:
    """Tests for building transactions from PaySim columns."""

    def test_parses_paysim_row(self) -> None:
        """Assert CSV aliases and string values are converted to typed fields."""
        tx = Transaction.model_validate(PAYSIM_ROW)

        assert tx.type == TransactionType.TRANSFER
        assert tx.amount == 181.0
        assert tx.origin_id == "C1305486145"
        assert tx.dest_id == "C553264065"
        assert tx.is_fraud is True
        assert tx.is_flagged_fraud is False

    def test_timestamp_defaults_to_ingestion_time(self) -> None:
        """Assert a missing or blank transaction_date becomes the current time."""
        before = datetime.now()
        missing = Transaction.model_validate(PAYSIM_ROW)
        blank = Transaction.model_validate({**PAYSIM_ROW, "transaction_date": ""})
        after = datetime.now()

        assert before <= missing.timestamp <= after
        assert before <= blank.timestamp <= after

    def test_timestamp_parsed_from_text(self) -> None:
        """Assert a space-separated timestamp is parsed."""
        tx = Transaction.model_validate({**PAYSIM_ROW, "transaction_date": "2024-03-05 14:30:00"})
        assert tx.timestamp == datetime(2024, 3, 5, 14, 30)
        assert tx.hour == 14

    def test_transaction_is_immutable(self, make_transaction) -> None:
        """Assert fields cannot be reassigned after creation."""
        tx = make_transaction()
        with pytest.raises(pydantic.ValidationError):
            tx.amount = 5.0


class TestTransactionInvariants:
    """Tests for rejected values."""

    @pytest.mark.parametrize("amount", ["0", "-10.5", "abc"])
    def test_rejects_non_positive_amount(self, amount: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, "amount": amount})

    @pytest.mark.parametrize(
        "column", ["oldbalanceOrg", "newbalanceOrig", "oldbalanceDest", "newbalanceDest"]
    )
    def test_rejects_negative_balance(self, column: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, column: "-0.01"})

    def test_rejects_unknown_type(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, "type": "WIRE"})

    @pytest.mark.parametrize("column", ["isFraud", "isFlaggedFraud"])
    def test_rejects_non_binary_flag(self, column: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, column: "2"})

    @pytest.mark.parametrize("amount", ["inf", "-inf", "nan", "Infinity"])
    def test_rejects_non_finite_amount(self, amount: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, "amount": amount})

    def test_rejects_non_finite_balance(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, "newbalanceDest": "inf"})

    @pytest.mark.parametrize("flag", ["yes", "no", "on", "off", "y", "t", "f", "1.0"])
    def test_rejects_other_truthy_spellings(self, flag: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, "isFraud": flag})

    @pytest.mark.parametrize(
        "flag, expected", [("0", False), ("1", True), ("true", True), ("FALSE", False), (1, True)]
    )
    def test_accepts_binary_flag_spellings(self, flag, expected: bool) -> None:
        tx = Transaction.model_validate({**PAYSIM_ROW, "isFlaggedFraud": flag})
        assert tx.is_flagged_fraud is expected


class TestTimestampParsing:
    """Tests for transaction_date formats."""

    def test_utc_suffix_and_fractional_seconds(self) -> None:
        tx = Transaction.model_validate(
            {**PAYSIM_ROW, "transaction_date": "2024-03-05T14:30:00.250Z"}
        )

        assert tx.timestamp == datetime(2024, 3, 5, 14, 30, 0, 250000, tzinfo=timezone.utc)
        assert tx.hour == 14

    def test_rejects_unparseable_timestamp(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            Transaction.model_validate({**PAYSIM_ROW, "transaction_date": "last tuesday"})
