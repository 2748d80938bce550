"""Kubernetes upgrade impact analysis and remediation planning."""

__version__ = "0.1.0"
