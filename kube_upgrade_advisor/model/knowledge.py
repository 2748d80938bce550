"""Knowledge base record models."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class DeprecationRecord(BaseModel):
    """Deprecation information for a Kubernetes API.

    An empty ``group`` denotes the core API group.
    """

    group: str = ""
    version: str
    kind: str
    deprecated_in: str = Field(alias="deprecatedIn")
    removed_in: str = Field(alias="removedIn")
    replacement_api: str = Field("", alias="replacementAPI")
    migration_notes: str = Field("", alias="migrationNotes")

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def key(self) -> Tuple[str, str, str]:
        """Get the (group, version, kind) lookup key."""
        return self.group, self.version, self.kind


class ChartCompatibilityEntry(BaseModel):
    """Compatibility of one chart release with cluster versions."""

    chart_version: str = Field(alias="chartVersion")
    compatible_with: List[str] = Field(default_factory=list, alias="compatibleWith")
    known_issues: List[str] = Field(default_factory=list, alias="knownIssues")
    min_kube_version: Optional[str] = Field(None, alias="minKubeVersion")
    max_kube_version: Optional[str] = Field(None, alias="maxKubeVersion")

    class Config:
        frozen = True
        populate_by_name = True


class ChartInfo(BaseModel):
    """A Helm chart with all of its catalogued releases."""

    chart_name: str = Field(alias="chartName")
    repository: Optional[str] = None
    versions: List[ChartCompatibilityEntry] = Field(default_factory=list)

    class Config:
        frozen = True
        populate_by_name = True


class ChartRecommendation(BaseModel):
    """Recommendation for a chart release ahead of a cluster upgrade."""

    chart_name: str
    current_version: str
    recommended_version: Optional[str] = None
    is_compatible: bool
    message: str
    known_issues: List[str] = Field(default_factory=list)
