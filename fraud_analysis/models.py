from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Accepted source spellings of the isFraud and isFlaggedFraud columns
BINARY_FLAG_VALUES: Dict[str, bool] = {"0": False, "1": True, "false": False, "true": True}


class TransactionType(str, Enum):
    """PaySim transaction categories."""

    PAYMENT = "PAYMENT"
    TRANSFER = "TRANSFER"
    CASH_OUT = "CASH_OUT"
    DEBIT = "DEBIT"
    CASH_IN = "CASH_IN"


class Segment(str, Enum):
    """Customer tier derived from cumulative transaction volume."""

    PLATINUM = "Platinum"
    GOLD = "Gold"
    SILVER = "Silver"
    STANDARD = "Standard"


class Transaction(BaseModel):
    """
    A single immutable transaction record.

    Field aliases match the PaySim CSV header, so rows can be validated
    directly from the source file.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    step: int = Field(ge=0)
    type: TransactionType
    amount: float = Field(gt=0)
    origin_id: str = Field(alias="nameOrig", min_length=1)
    old_balance_orig: float = Field(alias="oldbalanceOrg", ge=0)
    new_balance_orig: float = Field(alias="newbalanceOrig", ge=0)
    dest_id: str = Field(alias="nameDest", min_length=1)
    old_balance_dest: float = Field(alias="oldbalanceDest", ge=0)
    new_balance_dest: float = Field(alias="newbalanceDest", ge=0)
    is_fraud: bool = Field(alias="isFraud")
    is_flagged_fraud: bool = Field(alias="isFlaggedFraud")
    timestamp: datetime = Field(default_factory=datetime.now, alias="transaction_date")

    @field_validator("is_fraud", "is_flagged_fraud", mode="before")
    @classmethod
    def _binary_flag(cls, value: Any) -> Any:
        """Flags must be 0/1 or true/false; no other truthy spellings."""
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in BINARY_FLAG_VALUES:
            return BINARY_FLAG_VALUES[value.strip().lower()]
        raise ValueError(f"flag must be 0, 1, true or false, got {value!r}")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _default_ingestion_time(cls, value: Any) -> Any:
        """Missing timestamps default to ingestion time."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return datetime.now()
        return value

    @property
    def hour(self) -> int:
        """Hour of day the transaction was recorded."""
        return self.timestamp.hour


@dataclass(frozen=True)
class CustomerAggregate:
    """Per-customer totals, recomputed on every report run."""

    customer_id: str
    transaction_count: int
    total_amount: float
    max_transaction: float
    fraud_incident_count: int = 0
    fraud_total_amount: float = 0.0


@dataclass(frozen=True)
class CustomerSegment:
    """A customer's tier label alongside the total it was derived from."""

    customer_id: str
    segment: Segment
    total_amount: float
