"""Core reporting functionality."""

from .reporter import ImpactReporter

__all__ = ["ImpactReporter"]
