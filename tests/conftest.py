"""Shared fixtures for the fraud analysis tests."""

from datetime import datetime
from typing import Callable

import pytest

from fraud_analysis.models import Transaction, TransactionType

DEFAULT_TIMESTAMP = datetime(2024, 1, 1, 10, 0)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for valid transactions; keyword arguments override the defaults."""

    def _make(**overrides) -> Transaction:
        fields = {
            "step": 1,
            "type": TransactionType.PAYMENT,
            "amount": 100.0,
            "origin_id": "C1",
            "old_balance_orig": 1000.0,
            "new_balance_orig": 900.0,
            "dest_id": "M1",
            "old_balance_dest": 0.0,
            "new_balance_dest": 0.0,
            "is_fraud": False,
            "is_flagged_fraud": False,
            "timestamp": DEFAULT_TIMESTAMP,
        }
        fields.update(overrides)
        return Transaction(**fields)

    return _make
