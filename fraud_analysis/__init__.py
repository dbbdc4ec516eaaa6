"""Fraud detection and customer segmentation reporting over PaySim-style transactions."""
