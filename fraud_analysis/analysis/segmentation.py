"""Customer tiering by cumulative transaction volume."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from fraud_analysis.analysis.metrics import mean_or_none
from fraud_analysis.config import AnalysisConfig
from fraud_analysis.models import CustomerAggregate, CustomerSegment, Segment

DEFAULT_THRESHOLDS: Tuple[Tuple[str, float], ...] = AnalysisConfig().SEGMENT_THRESHOLDS


@dataclass(frozen=True)
class SegmentSummary:
    """Population and average volume of one segment."""

    segment: Segment
    customers: int
    average_total_amount: float


def classify_segment(
    total_amount: float,
    thresholds: Sequence[Tuple[str, float]] = DEFAULT_THRESHOLDS,
) -> Segment:
    """
    Map a customer's total amount to a segment.

    Thresholds are checked from the highest tier down and the first strict
    ``>`` match wins, so a total of exactly 1,000,000 is Gold, not Platinum.

    Args:
        total_amount: Cumulative amount sent by the customer.
        thresholds: (segment label, exclusive lower bound) pairs, highest first.

    Returns:
        The matching Segment, or Segment.STANDARD when no bound is exceeded.
    """
    for label, lower_bound in thresholds:
        if total_amount > lower_bound:
            return Segment(label)
    return Segment.STANDARD


def segment_customers(
    aggregates: Iterable[CustomerAggregate],
    config: Optional[AnalysisConfig] = None,
) -> List[CustomerSegment]:
    """Label every customer aggregate with its segment."""
    thresholds = config.SEGMENT_THRESHOLDS if config else DEFAULT_THRESHOLDS
    return [
        CustomerSegment(
            customer_id=aggregate.customer_id,
            segment=classify_segment(aggregate.total_amount, thresholds),
            total_amount=aggregate.total_amount,
        )
        for aggregate in aggregates
    ]


def summarize_segments(segments: Iterable[CustomerSegment]) -> List[SegmentSummary]:
    """
    Count customers and average their totals per segment.

    Returns:
        One SegmentSummary per populated segment, ordered by average total
        amount descending. Averages are rounded to whole units.
    """
    df = pd.DataFrame(
        [(customer.segment.value, customer.total_amount) for customer in segments],
        columns=["segment", "total_amount"],
    )

    summaries = [
        SegmentSummary(
            segment=Segment(segment),
            customers=len(group),
            average_total_amount=mean_or_none(group["total_amount"], places=0),
        )
        for segment, group in df.groupby("segment")
    ]
    summaries.sort(key=lambda s: s.average_total_amount, reverse=True)
    return summaries
