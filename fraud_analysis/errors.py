"""Error types raised by the fraud analysis pipeline."""

from typing import List, Optional


class FraudAnalysisError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(FraudAnalysisError, ValueError):
    """A single source row violates a transaction invariant."""

    def __init__(
        self,
        message: str,
        row_number: Optional[int] = None,
        field: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> None:
        self.message = message
        self.row_number = row_number
        self.field = field
        self.customer_id = customer_id
        super().__init__(self._format())

    def _format(self) -> str:
        location = []
        if self.row_number is not None:
            location.append(f"row {self.row_number}")
        if self.customer_id:
            location.append(f"customer {self.customer_id}")
        if self.field:
            location.append(f"field '{self.field}'")
        prefix = ", ".join(location)
        return f"{prefix}: {self.message}" if prefix else self.message


class IngestionError(ValidationError):
    """One or more rows were rejected while loading a dataset."""

    def __init__(self, errors: List[ValidationError], message: Optional[str] = None) -> None:
        self.errors = list(errors)
        if message is None:
            message = f"{len(self.errors)} invalid row(s) rejected"
            if self.errors:
                message += f"; first: {self.errors[0]}"
        super().__init__(message)


class EmptyGroupError(FraudAnalysisError, ArithmeticError):
    """An aggregate was requested over zero rows."""
