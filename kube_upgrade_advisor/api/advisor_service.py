"""Advisor API service combining impact analysis and upgrade planning."""

from typing import List, Optional

from ..analysis import ImpactAnalyzer
from ..config import AdvisorSettings
from ..exceptions import AdvisorError
from ..inventory import InventoryStore, SnapshotInventoryStore
from ..model.assessment import ImpactAssessment
from ..model.inventory import ClusterInventory
from ..model.plan import UpgradeAssessmentWithPlan
from ..upgrade import UpgradePlanner
from ..utils.logger import get_logger, set_log_level

logger = get_logger(__name__)


class AdvisorService:
    """High-level service for upgrade impact assessment and planning."""

    def __init__(
        self,
        settings: Optional[AdvisorSettings] = None,
        store: Optional[InventoryStore] = None,
        analyzer: Optional[ImpactAnalyzer] = None,
        planner: Optional[UpgradePlanner] = None,
    ):
        """Initialize advisor service."""
        self.settings = settings or AdvisorSettings.from_env()
        set_log_level(self.settings.log_level)

        if store is None:
            if self.settings.inventory_path is None:
                raise AdvisorError("No inventory configured: set INVENTORY_PATH or pass a store")
            store = SnapshotInventoryStore.from_file(self.settings.inventory_path)
        self.store = store

        self.analyzer = analyzer or ImpactAnalyzer.from_paths(
            self.settings.api_knowledge_path,
            self.settings.chart_knowledge_path,
            store=self.store,
        )
        if self.analyzer.store is None:
            self.analyzer.store = self.store
        self.planner = planner or UpgradePlanner()

    def _cluster_id(self, cluster_id: Optional[str]) -> str:
        return cluster_id or self.settings.default_cluster_id

    def assess(self, target_version: str, cluster_id: Optional[str] = None) -> ImpactAssessment:
        """Compute the upgrade impact for a cluster."""
        return self.analyzer.compute_upgrade_impact(self._cluster_id(cluster_id), target_version)

    def plan(
        self, target_version: str, cluster_id: Optional[str] = None
    ) -> UpgradeAssessmentWithPlan:
        """Compute the upgrade impact and a validated upgrade plan."""
        assessment = self.assess(target_version, cluster_id)
        plan = self.planner.generate_plan(assessment)
        self.planner.validate_plan(plan)
        return UpgradeAssessmentWithPlan.combine(assessment, plan)

    def get_cluster(self, cluster_id: Optional[str] = None) -> ClusterInventory:
        """Get a cluster's inventory."""
        return self.store.get_cluster(self._cluster_id(cluster_id))

    def list_clusters(self) -> List[ClusterInventory]:
        """List clusters known to the inventory."""
        return self.store.list_clusters()
