"""Cluster inventory models."""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class APIOrigin(str, Enum):
    """Where an API usage was observed."""

    MANIFEST = "manifest"
    CRD = "crd"


def split_api_version(api_version: str) -> Tuple[str, str]:
    """Split an apiVersion string into (group, version)."""
    if "/" in api_version:
        group, version = api_version.split("/", 1)
        return group, version
    # Core group resources carry only the version, e.g. "v1"
    return "", api_version


class ObservedAPIUsage(BaseModel):
    """A distinct API surface seen in the cluster or local manifests."""

    group: str = ""
    version: str
    kind: str
    origin: APIOrigin = APIOrigin.MANIFEST
    count: int = 1

    @classmethod
    def from_api_version(
        cls, api_version: str, kind: str, origin: APIOrigin = APIOrigin.MANIFEST, count: int = 1
    ) -> "ObservedAPIUsage":
        """Build a usage from an apiVersion string."""
        group, version = split_api_version(api_version)
        return cls(group=group, version=version, kind=kind, origin=origin, count=count)

    @property
    def key(self) -> Tuple[str, str, str]:
        """Get the (group, version, kind) key."""
        return self.group, self.version, self.kind


class ObservedCRD(BaseModel):
    """A custom resource definition and the versions it serves."""

    name: str
    group: str
    kind: str
    served_versions: List[str] = Field(default_factory=list)


class ObservedHelmRelease(BaseModel):
    """A deployed Helm release."""

    chart_name: str
    namespace: str = "default"
    current_chart_version: str
    name: Optional[str] = None

    @property
    def release_name(self) -> str:
        """Get the release name, falling back to the chart name."""
        return self.name or self.chart_name


class ClusterInventory(BaseModel):
    """Point-in-time inventory of one cluster."""

    cluster_id: str
    name: Optional[str] = None
    current_version: str
    manifest_apis: List[ObservedAPIUsage] = Field(default_factory=list)
    crds: List[ObservedCRD] = Field(default_factory=list)
    helm_releases: List[ObservedHelmRelease] = Field(default_factory=list)
