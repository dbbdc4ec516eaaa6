"""Synthetic PaySim-style transaction generation."""

from datetime import datetime, timedelta
from typing import Dict, List, Tuple

import numpy as np

from fraud_analysis.config import HOURS_PER_STEP, AnalysisConfig
from fraud_analysis.models import Transaction, TransactionType

# Types that move money out of the originating account
DEBIT_TYPES = {
    TransactionType.PAYMENT,
    TransactionType.TRANSFER,
    TransactionType.CASH_OUT,
    TransactionType.DEBIT,
}
FRAUD_TYPES = {TransactionType.TRANSFER, TransactionType.CASH_OUT}
SIMULATION_START: datetime = datetime(2024, 1, 1)


def generate_customers(config: AnalysisConfig) -> List[str]:
    """
    Generate deterministic customer ids in the PaySim "C" format.

    Args:
        config: AnalysisConfig containing TOTAL_CUSTOMERS.

    Returns:
        List of customer id strings, e.g. "C000000042".
    """
    return [f"C{i:09d}" for i in range(config.TOTAL_CUSTOMERS)]


class TransactionGenerator:
    """Generates a synthetic transaction dataset for a customer population."""

    def __init__(self, config: AnalysisConfig, start: datetime = SIMULATION_START) -> None:
        """
        Initialize the generator.

        Args:
            config: AnalysisConfig with dataset generation parameters.
            start: Wall-clock time of step 0.
        """
        self.config = config
        self.start = start
        self.rng = np.random.default_rng(config.SEED)
        self._types = [TransactionType(name) for name in config.TYPE_DISTRIBUTION]
        self._type_probabilities = list(config.TYPE_DISTRIBUTION.values())
        self._merchants = [f"M{i:09d}" for i in range(config.TOTAL_MERCHANTS)]

    def generate(self, customers: List[str]) -> List[Transaction]:
        """
        Generate TARGET_TRANSACTIONS transactions between the given customers.

        Origin balances are tracked per customer so consecutive transactions
        chain correctly; a configured share of debits is recorded with an
        inconsistent post-balance. Fraud is only injected on TRANSFER and
        CASH_OUT.

        Returns:
            Transactions sorted by step.
        """
        if not customers:
            return []

        balances: Dict[str, float] = {
            customer: round(float(self.rng.lognormal(self.config.AMOUNT_MU, 1.0)), 2)
            for customer in customers
        }
        total_steps = self.config.SIMULATION_DAYS * 24 // HOURS_PER_STEP
        steps = np.sort(self.rng.integers(0, total_steps, size=self.config.TARGET_TRANSACTIONS))

        return [self._generate_single_transaction(int(step), customers, balances) for step in steps]

    def _generate_single_transaction(
        self, step: int, customers: List[str], balances: Dict[str, float]
    ) -> Transaction:
        tx_type = self._types[self.rng.choice(len(self._types), p=self._type_probabilities)]
        amount = self._generate_amount()
        origin_id = customers[self.rng.integers(len(customers))]
        dest_id, dest_old = self._select_destination(tx_type, origin_id, customers, balances)

        old_orig = balances[origin_id]
        new_orig = self._apply_to_origin(tx_type, old_orig, amount)
        balances[origin_id] = new_orig
        if self.rng.random() < self.config.DISCREPANCY_PROBABILITY and tx_type in DEBIT_TYPES:
            # Recorded balance drifts away from the true one
            new_orig = round(new_orig + float(self.rng.uniform(5, 500)), 2)

        if dest_id in balances:
            balances[dest_id] = round(dest_old + amount, 2)
            new_dest = balances[dest_id]
        else:
            new_dest = 0.0

        is_fraud = tx_type in FRAUD_TYPES and self.rng.random() < self.config.FRAUD_PROBABILITY
        is_flagged = (
            is_fraud
            and tx_type == TransactionType.TRANSFER
            and amount > self.config.FLAGGED_FRAUD_AMOUNT
        )

        timestamp = self.start + timedelta(
            hours=step * HOURS_PER_STEP, minutes=int(self.rng.integers(60))
        )
        return Transaction(
            step=step,
            type=tx_type,
            amount=amount,
            origin_id=origin_id,
            old_balance_orig=old_orig,
            new_balance_orig=new_orig,
            dest_id=dest_id,
            old_balance_dest=dest_old,
            new_balance_dest=new_dest,
            is_fraud=is_fraud,
            is_flagged_fraud=is_flagged,
            timestamp=timestamp,
        )

    def _generate_amount(self) -> float:
        """Generate a transaction amount using a lognormal distribution."""
        amount = self.rng.lognormal(mean=self.config.AMOUNT_MU, sigma=self.config.AMOUNT_SIGMA)
        # Clamp to a sane range: min 1.00, max 10M
        return round(max(1.0, min(float(amount), 10_000_000.0)), 2)

    def _select_destination(
        self,
        tx_type: TransactionType,
        origin_id: str,
        customers: List[str],
        balances: Dict[str, float],
    ) -> Tuple[str, float]:
        """Pick the receiving party and its balance before the transaction."""
        if tx_type == TransactionType.PAYMENT and self._merchants:
            # Merchant balances are not tracked
            return self._merchants[self.rng.integers(len(self._merchants))], 0.0

        dest_id = customers[self.rng.integers(len(customers))]
        if dest_id == origin_id and len(customers) > 1:
            dest_id = customers[(customers.index(origin_id) + 1) % len(customers)]
        return dest_id, balances[dest_id]

    @staticmethod
    def _apply_to_origin(tx_type: TransactionType, old_balance: float, amount: float) -> float:
        if tx_type == TransactionType.CASH_IN:
            return round(old_balance + amount, 2)
        # Overdrawn debits bottom out at zero
        return round(max(old_balance - amount, 0.0), 2)
