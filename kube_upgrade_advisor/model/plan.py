"""Upgrade plan models."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel

from .assessment import ImpactAssessment, ImpactLevel


class StepType(str, Enum):
    """Kind of upgrade step."""

    PRECHECK = "precheck"
    BACKUP = "backup"
    API_MIGRATION = "api_migration"
    CHART_UPGRADE = "chart_upgrade"
    CLUSTER_UPGRADE = "cluster_upgrade"
    VALIDATION = "validation"


class StepAction(BaseModel):
    """A human-readable action to perform within a step."""

    command: str
    description: str
    required: bool = True

    class Config:
        frozen = True


class UpgradeStep(BaseModel):
    """A single step in the upgrade plan.

    ``order`` stays unset until the step graph has been sorted.
    """

    id: str
    description: str
    type: StepType
    impact: ImpactLevel
    dependencies: Tuple[str, ...] = ()
    actions: Tuple[StepAction, ...] = ()
    order: Optional[int] = None

    class Config:
        frozen = True


class UpgradePlan(BaseModel):
    """The complete, ordered upgrade plan."""

    from_version: str
    to_version: str
    steps: Tuple[UpgradeStep, ...] = ()
    ordered_upgrade_steps: Tuple[str, ...] = ()
    timeline: str
    total_steps: int = 0

    class Config:
        frozen = True


class UpgradeAssessmentWithPlan(ImpactAssessment):
    """Impact assessment combined with its upgrade plan."""

    ordered_upgrade_steps: Tuple[str, ...] = ()
    upgrade_plan: Optional[UpgradePlan] = None

    @classmethod
    def combine(
        cls, assessment: ImpactAssessment, plan: Optional[UpgradePlan]
    ) -> "UpgradeAssessmentWithPlan":
        """Merge an assessment and plan into one response."""
        return cls(
            **{name: getattr(assessment, name) for name in ImpactAssessment.model_fields},
            ordered_upgrade_steps=plan.ordered_upgrade_steps if plan else (),
            upgrade_plan=plan,
        )
