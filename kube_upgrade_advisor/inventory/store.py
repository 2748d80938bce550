"""Inventory query surface.

Discovery and persistence live outside this package. The stores here serve
already-collected inventories, either held in memory or read from a snapshot
file exported by a scanner.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import AdvisorError, ClusterNotFoundError
from ..model.inventory import APIOrigin, ClusterInventory, ObservedAPIUsage
from ..utils.logger import get_logger

logger = get_logger(__name__)


class InventoryStore(ABC):
    """Read access to cluster inventories."""

    @abstractmethod
    def get_cluster(self, cluster_id: str) -> ClusterInventory:
        """Get a cluster's inventory, raising ClusterNotFoundError if unknown."""
        pass

    @abstractmethod
    def list_clusters(self) -> List[ClusterInventory]:
        """List all known cluster inventories."""
        pass


class InMemoryInventoryStore(InventoryStore):
    """Inventory store backed by a dictionary."""

    def __init__(self, clusters: Optional[Iterable[ClusterInventory]] = None):
        self._clusters: Dict[str, ClusterInventory] = {}
        for cluster in clusters or []:
            self.save_cluster(cluster)

    def save_cluster(self, inventory: ClusterInventory) -> None:
        """Create or replace a cluster's inventory."""
        if inventory.cluster_id in self._clusters:
            logger.info(f"Updating existing cluster: {inventory.cluster_id}")
        self._clusters[inventory.cluster_id] = inventory

    def get_cluster(self, cluster_id: str) -> ClusterInventory:
        try:
            return self._clusters[cluster_id]
        except KeyError:
            raise ClusterNotFoundError(cluster_id) from None

    def list_clusters(self) -> List[ClusterInventory]:
        return list(self._clusters.values())


def _normalize_manifest_api(item: Dict[str, Any]) -> Dict[str, Any]:
    """Accept manifest usages written as apiVersion + kind."""
    if "apiVersion" in item:
        usage = ObservedAPIUsage.from_api_version(
            item["apiVersion"],
            item["kind"],
            origin=APIOrigin(item.get("origin", APIOrigin.MANIFEST.value)),
            count=item.get("count", 1),
        )
        return usage.model_dump()
    return item


def parse_cluster(data: Dict[str, Any]) -> ClusterInventory:
    """Validate one cluster mapping from a snapshot."""
    data = dict(data)
    data["manifest_apis"] = [
        _normalize_manifest_api(item) for item in data.get("manifest_apis", [])
    ]
    return ClusterInventory.model_validate(data)


class SnapshotInventoryStore(InMemoryInventoryStore):
    """Inventory store loaded from a YAML or JSON snapshot file.

    The file holds either a single cluster mapping or a ``clusters`` list.
    """

    def __init__(
        self,
        clusters: Optional[Iterable[ClusterInventory]] = None,
        path: Optional[Path] = None,
    ):
        super().__init__(clusters)
        self.path = path

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SnapshotInventoryStore":
        """Load a snapshot file."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.error(f"Failed to read inventory snapshot {path}: {e}")
            raise AdvisorError(f"Failed to read inventory snapshot {path}: {e}") from e

        if isinstance(data, dict) and "clusters" in data:
            items = data["clusters"] or []
        elif isinstance(data, dict):
            items = [data]
        else:
            raise AdvisorError(f"Inventory snapshot {path} must be a mapping")

        try:
            clusters = [parse_cluster(item) for item in items]
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            raise AdvisorError(f"Invalid inventory snapshot {path}: {e}") from e

        logger.info(f"Loaded {len(clusters)} cluster inventories from {path}")
        return cls(clusters, path=path)
