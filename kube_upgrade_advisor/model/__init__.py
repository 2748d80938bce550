"""Data models for kube-upgrade-advisor."""

from .assessment import ChartImpact, DeprecatedAPIImpact, ImpactAssessment, ImpactLevel
from .inventory import (
    APIOrigin,
    ClusterInventory,
    ObservedAPIUsage,
    ObservedCRD,
    ObservedHelmRelease,
)
from .knowledge import ChartCompatibilityEntry, ChartInfo, ChartRecommendation, DeprecationRecord
from .plan import StepAction, StepType, UpgradeAssessmentWithPlan, UpgradePlan, UpgradeStep
from .report import ReportFormat

__all__ = [
    "APIOrigin",
    "ChartCompatibilityEntry",
    "ChartImpact",
    "ChartInfo",
    "ChartRecommendation",
    "ClusterInventory",
    "DeprecatedAPIImpact",
    "DeprecationRecord",
    "ImpactAssessment",
    "ImpactLevel",
    "ObservedAPIUsage",
    "ObservedCRD",
    "ObservedHelmRelease",
    "ReportFormat",
    "StepAction",
    "StepType",
    "UpgradeAssessmentWithPlan",
    "UpgradePlan",
    "UpgradeStep",
]
