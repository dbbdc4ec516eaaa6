"""Synthetic transaction dataset generation."""

from fraud_analysis.traffic.transaction_generator import TransactionGenerator, generate_customers

__all__ = ["TransactionGenerator", "generate_customers"]
