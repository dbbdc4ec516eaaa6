from dataclasses import dataclass, field
from typing import Dict, Tuple


# Time constants
HOURS_PER_STEP: int = 1  # PaySim: one step is one hour of simulated time

# Segmentation thresholds on cumulative sent amount (strict ">" comparison)
PLATINUM_THRESHOLD: float = 1_000_000
GOLD_THRESHOLD: float = 500_000
SILVER_THRESHOLD: float = 100_000

# Fraud scoring
DISCREPANCY_TOLERANCE: float = 1.0  # Allowed rounding drift in balances
HIGH_RISK_MIN_FRAUD_COUNT: int = 3
DAILY_REPORT_TOP_N: int = 10

# Export file names
CUSTOMER_SEGMENTS_FILENAME: str = "customer_segments.csv"
FRAUD_PATTERNS_FILENAME: str = "fraud_patterns.csv"


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the fraud analysis pipeline and synthetic dataset."""

    # Segment label -> exclusive lower bound, highest tier first
    SEGMENT_THRESHOLDS: Tuple[Tuple[str, float], ...] = (
        ("Platinum", PLATINUM_THRESHOLD),
        ("Gold", GOLD_THRESHOLD),
        ("Silver", SILVER_THRESHOLD),
    )
    DISCREPANCY_TOLERANCE: float = DISCREPANCY_TOLERANCE
    HIGH_RISK_MIN_FRAUD_COUNT: int = HIGH_RISK_MIN_FRAUD_COUNT
    DAILY_REPORT_TOP_N: int = DAILY_REPORT_TOP_N

    # Random seed for reproducibility of the synthetic dataset
    SEED: int = 42

    # Synthetic dataset generation
    TOTAL_CUSTOMERS: int = 200
    TOTAL_MERCHANTS: int = 50
    TARGET_TRANSACTIONS: int = 5_000
    SIMULATION_DAYS: int = 30
    TYPE_DISTRIBUTION: Dict[str, float] = field(
        default_factory=lambda: {
            "CASH_OUT": 0.35,
            "PAYMENT": 0.34,
            "CASH_IN": 0.22,
            "TRANSFER": 0.08,
            "DEBIT": 0.01,
        }
    )

    # Amount distribution (lognormal, mean around 180k like PaySim)
    AMOUNT_MU: float = 11.0
    AMOUNT_SIGMA: float = 1.4

    # Fraud is only injected on TRANSFER and CASH_OUT
    FRAUD_PROBABILITY: float = 0.02
    FLAGGED_FRAUD_AMOUNT: float = 200_000  # isFlaggedFraud fires above this on TRANSFER
    DISCREPANCY_PROBABILITY: float = 0.05

    def __post_init__(self) -> None:
        bounds = [bound for _, bound in self.SEGMENT_THRESHOLDS]
        if any(upper <= lower for upper, lower in zip(bounds, bounds[1:])):
            raise ValueError(
                f"SEGMENT_THRESHOLDS must be strictly descending, got {bounds}"
            )
        total_prob = sum(self.TYPE_DISTRIBUTION.values())
        if not abs(total_prob - 1.0) < 1e-9:
            raise ValueError(
                f"TYPE_DISTRIBUTION probabilities must sum to 1.0, got {total_prob}"
            )
        if self.DISCREPANCY_TOLERANCE < 0:
            raise ValueError(
                f"DISCREPANCY_TOLERANCE must be non-negative, got {self.DISCREPANCY_TOLERANCE}"
            )
        if self.HIGH_RISK_MIN_FRAUD_COUNT < 1:
            raise ValueError(
                f"HIGH_RISK_MIN_FRAUD_COUNT must be at least 1, got {self.HIGH_RISK_MIN_FRAUD_COUNT}"
            )
