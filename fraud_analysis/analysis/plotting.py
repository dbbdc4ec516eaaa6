"""Visualization functions for fraud analysis results."""

import logging
from pathlib import Path
from typing import Dict, List, Sequence

import matplotlib.pyplot as plt

from fraud_analysis.analysis.fraud_scorer import FraudRate, HourlyFraudTrend
from fraud_analysis.analysis.segmentation import SegmentSummary
from fraud_analysis.models import Segment

logger = logging.getLogger(__name__)

# Color palette for consistent segment styling
SEGMENT_COLORS: Dict[Segment, str] = {
    Segment.PLATINUM: "#6366F1",  # Indigo
    Segment.GOLD: "#F59E0B",  # Amber
    Segment.SILVER: "#9CA3AF",  # Light gray
    Segment.STANDARD: "#3B82F6",  # Blue
}
FRAUD_COLOR: str = "#EF4444"  # Red


def plot_fraud_overview(
    fraud_rates: Sequence[FraudRate],
    segment_summaries: Sequence[SegmentSummary],
    hourly_trends: Sequence[HourlyFraudTrend],
    output_dir: str,
    filename_suffix: str = "",
) -> List[Path]:
    """
    Generate the fraud overview charts.

    Creates three charts:
    1. Fraud Rate by Type - bar chart of fraud rate per transaction type
    2. Customer Segments - bar chart of customers per segment
    3. Hourly Fraud Rate - fraud rate for each hour of the day

    Args:
        fraud_rates: Output of fraud_rate_by_type.
        segment_summaries: Output of summarize_segments.
        hourly_trends: Output of hourly_fraud_trends.
        output_dir: Directory path to save the generated plots.
        filename_suffix: Optional suffix for output filenames.

    Returns:
        Paths of the files written.
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    return [
        _plot_fraud_rates(fraud_rates, output_path, filename_suffix),
        _plot_segments(segment_summaries, output_path, filename_suffix),
        _plot_hourly_trends(hourly_trends, output_path, filename_suffix),
    ]


def _save(fig, path: Path) -> Path:
    plt.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved: %s", path)
    return path


def _plot_fraud_rates(
    fraud_rates: Sequence[FraudRate], output_path: Path, filename_suffix: str = ""
) -> Path:
    """Generate fraud rate by transaction type bar chart."""
    plt.style.use("seaborn-v0_8-whitegrid")
    fig, ax = plt.subplots(figsize=(10, 6))

    labels = [rate.tx_type.value for rate in fraud_rates]
    values = [rate.fraud_rate for rate in fraud_rates]
    bars = ax.bar(range(len(labels)), values, color=FRAUD_COLOR, edgecolor="white", linewidth=1.5)

    # Add value labels on bars
    for bar, value in zip(bars, values):
        ax.annotate(
            f"{value:.3f}%",
            xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
            xytext=(0, 3),
            textcoords="offset points",
            ha="center",
            va="bottom",
            fontsize=10,
        )

    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels)
    ax.set_xlabel("Transaction Type", fontsize=12)
    ax.set_ylabel("Fraud Rate (%)", fontsize=12)
    ax.set_title("Fraud Rate by Transaction Type", fontsize=14, fontweight="bold")
    ax.set_ylim(bottom=0)

    return _save(fig, output_path / f"fraud_rate_by_type{filename_suffix}.png")


def _plot_segments(
    segment_summaries: Sequence[SegmentSummary], output_path: Path, filename_suffix: str = ""
) -> Path:
    """Generate customers-per-segment bar chart."""
    plt.style.use("seaborn-v0_8-whitegrid")
    fig, ax = plt.subplots(figsize=(10, 6))

    labels = [summary.segment.value for summary in segment_summaries]
    counts = [summary.customers for summary in segment_summaries]
    colors = [SEGMENT_COLORS[summary.segment] for summary in segment_summaries]
    ax.bar(range(len(labels)), counts, color=colors, edgecolor="white", linewidth=1.5)

    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels)
    ax.set_xlabel("Segment", fontsize=12)
    ax.set_ylabel("Customers", fontsize=12)
    ax.set_title("Customer Segments", fontsize=14, fontweight="bold")
    ax.set_ylim(bottom=0)

    return _save(fig, output_path / f"customer_segments{filename_suffix}.png")


def _plot_hourly_trends(
    hourly_trends: Sequence[HourlyFraudTrend], output_path: Path, filename_suffix: str = ""
) -> Path:
    """Generate fraud rate by hour of day line chart."""
    plt.style.use("seaborn-v0_8-whitegrid")
    fig, ax = plt.subplots(figsize=(12, 6))

    ordered = sorted(hourly_trends, key=lambda trend: trend.hour)
    ax.plot(
        [trend.hour for trend in ordered],
        [trend.fraud_rate for trend in ordered],
        color=FRAUD_COLOR,
        marker="o",
        linewidth=1.5,
    )

    ax.set_xlabel("Hour of Day", fontsize=12)
    ax.set_ylabel("Fraud Rate (%)", fontsize=12)
    ax.set_title("Fraud Rate by Hour of Day", fontsize=14, fontweight="bold")
    ax.set_xlim(0, 23)
    ax.set_ylim(bottom=0)

    return _save(fig, output_path / f"hourly_fraud_rate{filename_suffix}.png")
