import argparse
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from fraud_analysis.analysis.aggregator import TypeSummary, aggregate_customers, summarize_by_type
from fraud_analysis.analysis.fraud_scorer import (
    BalanceDiscrepancy,
    FraudPattern,
    FraudRate,
    HighRiskCustomer,
    HourlyFraudTrend,
    find_balance_discrepancies,
    fraud_pattern_rows,
    fraud_patterns_by_type,
    fraud_rate_by_type,
    hourly_fraud_trends,
)
from fraud_analysis.analysis.plotting import plot_fraud_overview
from fraud_analysis.analysis.segmentation import (
    SegmentSummary,
    segment_customers,
    summarize_segments,
)
from fraud_analysis.config import (
    CUSTOMER_SEGMENTS_FILENAME,
    FRAUD_PATTERNS_FILENAME,
    AnalysisConfig,
)
from fraud_analysis.export.csv_exporter import (
    export_customer_segments,
    export_fraud_patterns,
    export_transactions,
)
from fraud_analysis.reports.daily_report import (
    DailyFraudReport,
    generate_daily_fraud_report,
    high_risk_customers,
)
from fraud_analysis.store.loader import load_transactions
from fraud_analysis.store.transaction_store import TransactionStore
from fraud_analysis.traffic.transaction_generator import TransactionGenerator, generate_customers

DATA_DIR: Path = Path("data")
SYNTHETIC_CSV_PATH: Path = DATA_DIR / "synthetic_transactions.csv"
OUTPUT_DIR: Path = Path("output")


def _amount(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:,.0f}"


def print_type_summary(summaries: List[TypeSummary]) -> None:
    """Print a formatted transaction overview by type."""
    print("\n" + "=" * 70)
    print("Transaction Overview by Type")
    print("=" * 70)
    print(f"{'Type':<12} {'Count':>10} {'Share':>9} {'Avg Amount':>16} {'Total Volume':>19}")
    print("-" * 70)
    for s in summaries:
        print(
            f"{s.tx_type.value:<12} "
            f"{s.count:>10,} "
            f"{s.percentage:>8.2f}% "
            f"{s.average_amount:>16,.2f} "
            f"{s.total_volume:>19,.2f}"
        )
    print("-" * 70)
    print(f"{'TOTAL':<12} {sum(s.count for s in summaries):>10,}")
    print("=" * 70 + "\n")


def print_fraud_rates(rates: List[FraudRate]) -> None:
    """Print fraud count, rate and average fraud amount per type."""
    print("=" * 60)
    print("Fraud Analysis by Type")
    print("=" * 60)
    print(f"{'Type':<12} {'Fraud Count':>12} {'Fraud Rate':>12} {'Avg Fraud Amt':>18}")
    print("-" * 60)
    for r in rates:
        print(
            f"{r.tx_type.value:<12} "
            f"{r.fraud_count:>12,} "
            f"{r.fraud_rate:>11.3f}% "
            f"{_amount(r.average_fraud_amount):>18}"
        )
    print("=" * 60 + "\n")


def print_segment_summary(summaries: List[SegmentSummary]) -> None:
    """Print customer counts and average volume per segment."""
    print("=" * 50)
    print("Customer Segmentation")
    print("=" * 50)
    print(f"{'Segment':<12} {'Customers':>12} {'Avg Total Amount':>22}")
    print("-" * 50)
    for s in summaries:
        print(f"{s.segment.value:<12} {s.customers:>12,} {_amount(s.average_total_amount):>22}")
    print("=" * 50 + "\n")


def print_fraud_patterns(patterns: List[FraudPattern]) -> None:
    """Print the average shape of fraudulent transactions per type."""
    print("=" * 70)
    print("Fraud Patterns")
    print("=" * 70)
    print(f"{'Type':<12} {'Avg Amount':>16} {'Balance Change':>18} {'Avg Old Balance':>20}")
    print("-" * 70)
    for p in patterns:
        print(
            f"{p.tx_type.value:<12} "
            f"{_amount(p.average_amount):>16} "
            f"{_amount(p.average_balance_change):>18} "
            f"{_amount(p.average_old_balance_orig):>20}"
        )
    print("=" * 70 + "\n")


def print_hourly_trends(trends: List[HourlyFraudTrend], limit: int = 5) -> None:
    """Print the hours with the highest fraud rate."""
    print("=" * 50)
    print(f"Hourly Fraud Trends (top {limit})")
    print("=" * 50)
    print(f"{'Hour':<8} {'Transactions':>14} {'Fraud':>10} {'Rate':>12}")
    print("-" * 50)
    for t in trends[:limit]:
        print(f"{t.hour:<8} {t.total_transactions:>14,} {t.fraud_count:>10,} {t.fraud_rate:>11.2f}%")
    print("=" * 50 + "\n")


def print_discrepancies(discrepancies: List[BalanceDiscrepancy], limit: int = 10) -> None:
    """Print a sample of balance discrepancy flags."""
    print("=" * 70)
    print(f"Balance Discrepancy Flags ({len(discrepancies):,} flagged)")
    print("=" * 70)
    print(f"{'Customer':<14} {'Type':<10} {'Amount':>14} {'Expected':>14} {'Discrepancy':>14}")
    print("-" * 70)
    for d in discrepancies[:limit]:
        print(
            f"{d.origin_id:<14} "
            f"{d.tx_type.value:<10} "
            f"{d.amount:>14,.2f} "
            f"{d.expected_balance:>14,.2f} "
            f"{d.discrepancy:>14,.2f}"
        )
    print("=" * 70 + "\n")


def print_daily_report(report: DailyFraudReport) -> None:
    """Print the daily fraud summary and its top transactions."""
    print("=" * 70)
    print(f"Fraud Report for {report.report_date.isoformat()}:")
    print("-" * 70)
    if report.is_empty:
        print("No fraudulent transactions recorded.")
        print("=" * 70 + "\n")
        return

    print(f"{'Type':<12} {'Total Fraud':>12} {'Avg Amount':>16}")
    for s in report.summary:
        print(f"{s.tx_type.value:<12} {s.total_fraud:>12,} {_amount(s.average_amount):>16}")
    print("-" * 70)
    print(f"{'Origin':<14} {'Destination':<14} {'Amount':>16} {'Type':>12}")
    for tx in report.top_transactions:
        print(f"{tx.origin_id:<14} {tx.dest_id:<14} {tx.amount:>16,.2f} {tx.type.value:>12}")
    print("=" * 70 + "\n")


def print_high_risk_customers(customers: List[HighRiskCustomer]) -> None:
    """Print customers with repeated fraud, largest fraud total first."""
    print("=" * 50)
    print("High-Risk Customers")
    print("=" * 50)
    if not customers:
        print("None found.")
    for c in customers:
        print(f"{c.customer_id:<16} {c.fraud_count:>8,} {c.fraud_total_amount:>20,.2f}")
    print("=" * 50 + "\n")


def build_synthetic_store(config: AnalysisConfig, path: Path) -> TransactionStore:
    """Generate a synthetic dataset, save it as CSV and load it back through ingestion."""
    customers = generate_customers(config)
    generator = TransactionGenerator(config)
    store = TransactionStore(generator.generate(customers))
    export_transactions(store, path)
    print(f"Synthetic transactions saved to: {path}")
    return load_transactions(path)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Banking fraud detection and customer analysis")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--data", type=Path, help="PaySim-format transaction CSV")
    source.add_argument(
        "--generate", action="store_true", help="Analyse a generated synthetic dataset (default)"
    )
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR, help="Export directory")
    parser.add_argument(
        "--report-date",
        type=date.fromisoformat,
        help="Date (YYYY-MM-DD) for the daily fraud report",
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Load transactions, print the analysis, and export the reporting files."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = AnalysisConfig()

    if args.data:
        store = load_transactions(args.data)
    else:
        store = build_synthetic_store(config, SYNTHETIC_CSV_PATH)

    # Core analysis
    print_type_summary(summarize_by_type(store))
    fraud_rates = fraud_rate_by_type(store)
    print_fraud_rates(fraud_rates)

    segments = segment_customers(aggregate_customers(store), config)
    segment_summaries = summarize_segments(segments)
    print_segment_summary(segment_summaries)
    print_fraud_patterns(fraud_patterns_by_type(store))

    # Advanced analytics
    trends = hourly_fraud_trends(store)
    print_hourly_trends(trends)
    print_discrepancies(find_balance_discrepancies(store, config.DISCREPANCY_TOLERANCE))

    # Reports
    fraud_dates = sorted({tx.timestamp.date() for tx in store.fraudulent()})
    report_date = args.report_date or (fraud_dates[-1] if fraud_dates else date.today())
    print_daily_report(generate_daily_fraud_report(store, report_date, config.DAILY_REPORT_TOP_N))
    print_high_risk_customers(high_risk_customers(store, config))

    # Exports
    segments_path = args.output_dir / CUSTOMER_SEGMENTS_FILENAME
    patterns_path = args.output_dir / FRAUD_PATTERNS_FILENAME
    export_customer_segments(segments, segments_path)
    export_fraud_patterns(fraud_pattern_rows(store), patterns_path)
    print(f"Customer segments exported to: {segments_path}")
    print(f"Fraud patterns exported to: {patterns_path}")

    if not args.no_plots:
        plot_fraud_overview(fraud_rates, segment_summaries, trends, str(args.output_dir))
        print(f"\nVisualization plots saved to: {args.output_dir}/")


if __name__ == "__main__":
    main()
