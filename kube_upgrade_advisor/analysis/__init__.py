"""Upgrade impact analysis."""

from .analyzer import ImpactAnalyzer, calculate_overall_risk

__all__ = ["ImpactAnalyzer", "calculate_overall_risk"]
