"""Kubernetes upgrade planning."""

from .planner import StepGraph, UpgradePlanner, estimate_timeline, sanitize_id
from .versions import (
    VersionOrder,
    compare_chart_versions,
    compare_versions,
    is_at_least,
    is_valid_version,
    parse_version,
    versions_match,
)

__all__ = [
    "StepGraph",
    "UpgradePlanner",
    "VersionOrder",
    "compare_chart_versions",
    "compare_versions",
    "estimate_timeline",
    "is_at_least",
    "is_valid_version",
    "parse_version",
    "sanitize_id",
    "versions_match",
]
