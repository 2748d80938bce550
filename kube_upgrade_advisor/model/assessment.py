"""Upgrade impact assessment models."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel

from .inventory import APIOrigin


class ImpactLevel(str, Enum):
    """Severity of an upgrade impact."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DeprecatedAPIImpact(BaseModel):
    """Impact of an API that is removed at the target version."""

    group: str
    version: str
    kind: str
    affected_count: int = 1
    impact_level: ImpactLevel
    removed_in: str
    replacement_api: str = ""
    migration_notes: str = ""
    source: APIOrigin

    class Config:
        frozen = True

    @property
    def key(self) -> Tuple[str, str, str]:
        """Get the (group, version, kind) key."""
        return self.group, self.version, self.kind

    @property
    def group_version(self) -> str:
        """Get the apiVersion form, omitting the core group."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


class ChartImpact(BaseModel):
    """Impact of a Helm release that is incompatible with the target version."""

    chart_name: str
    release_name: str
    namespace: str
    current_version: str
    recommended_version: Optional[str] = None
    impact_level: ImpactLevel = ImpactLevel.HIGH
    message: str = ""
    issues: Tuple[str, ...] = ()

    class Config:
        frozen = True


class ImpactAssessment(BaseModel):
    """Analysis of the impact of upgrading a cluster to a target version."""

    cluster_id: str
    current_version: str
    target_version: str
    deprecated_manifest_apis: Tuple[DeprecatedAPIImpact, ...] = ()
    deprecated_crd_apis: Tuple[DeprecatedAPIImpact, ...] = ()
    incompatible_charts: Tuple[ChartImpact, ...] = ()
    overall_risk: ImpactLevel = ImpactLevel.NONE
    total_issues: int = 0

    class Config:
        frozen = True
