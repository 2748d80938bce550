"""Upgrade impact analysis."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..exceptions import AdvisorError
from ..inventory.store import InventoryStore
from ..knowledge import (
    APIKnowledgeBase,
    ChartKnowledgeBase,
    default_api_knowledge_base,
    default_chart_knowledge_base,
    load_api_knowledge_base,
    load_chart_knowledge_base,
)
from ..model.assessment import ChartImpact, DeprecatedAPIImpact, ImpactAssessment, ImpactLevel
from ..model.inventory import APIOrigin, ClusterInventory, ObservedAPIUsage
from ..utils.logger import get_logger

logger = get_logger(__name__)


def calculate_overall_risk(
    manifest_impacts: List[DeprecatedAPIImpact],
    crd_impacts: List[DeprecatedAPIImpact],
    chart_impacts: List[ChartImpact],
) -> ImpactLevel:
    """Determine the overall risk with a fixed priority cascade."""
    if not (manifest_impacts or crd_impacts or chart_impacts):
        return ImpactLevel.NONE
    if manifest_impacts:
        return ImpactLevel.CRITICAL
    if crd_impacts or chart_impacts:
        return ImpactLevel.HIGH
    return ImpactLevel.MEDIUM


class ImpactAnalyzer:
    """Cross-references a cluster inventory against the knowledge bases."""

    def __init__(
        self,
        api_kb: APIKnowledgeBase,
        chart_kb: ChartKnowledgeBase,
        store: Optional[InventoryStore] = None,
    ):
        self.api_kb = api_kb
        self.chart_kb = chart_kb
        self.store = store

    @classmethod
    def from_paths(
        cls,
        api_knowledge_path: Optional[Union[str, Path]] = None,
        chart_knowledge_path: Optional[Union[str, Path]] = None,
        store: Optional[InventoryStore] = None,
    ) -> "ImpactAnalyzer":
        """Create an analyzer from knowledge base files.

        A path left as None selects the built-in knowledge data. Load failures
        raise KnowledgeBaseLoadError here rather than at analysis time.
        """
        api_kb = (
            load_api_knowledge_base(api_knowledge_path)
            if api_knowledge_path
            else default_api_knowledge_base()
        )
        chart_kb = (
            load_chart_knowledge_base(chart_knowledge_path)
            if chart_knowledge_path
            else default_chart_knowledge_base()
        )
        return cls(api_kb, chart_kb, store)

    def compute_upgrade_impact(self, cluster_id: str, target_version: str) -> ImpactAssessment:
        """Analyze the impact of upgrading a stored cluster to a target version."""
        if self.store is None:
            raise AdvisorError("Analyzer has no inventory store configured")
        inventory = self.store.get_cluster(cluster_id)
        return self.compute_impact(inventory, target_version)

    def compute_impact(self, inventory: ClusterInventory, target_version: str) -> ImpactAssessment:
        """Analyze the impact of upgrading an inventoried cluster to a target version."""
        logger.info(
            f"Computing upgrade impact for {inventory.cluster_id}: "
            f"{inventory.current_version} -> {target_version}"
        )

        manifest_impacts = self._check_manifest_apis(inventory.manifest_apis, target_version)
        crd_impacts = self._check_crds(inventory, target_version)
        chart_impacts = self._check_helm_releases(inventory, target_version)

        total_issues = len(manifest_impacts) + len(crd_impacts) + len(chart_impacts)
        assessment = ImpactAssessment(
            cluster_id=inventory.cluster_id,
            current_version=inventory.current_version,
            target_version=target_version,
            deprecated_manifest_apis=manifest_impacts,
            deprecated_crd_apis=crd_impacts,
            incompatible_charts=chart_impacts,
            overall_risk=calculate_overall_risk(manifest_impacts, crd_impacts, chart_impacts),
            total_issues=total_issues,
        )

        logger.info(
            f"Found {total_issues} issues for {inventory.cluster_id} "
            f"(overall risk: {assessment.overall_risk.value})"
        )
        return assessment

    def _removed_api_impact(
        self,
        group: str,
        version: str,
        kind: str,
        target_version: str,
        level: ImpactLevel,
        source: APIOrigin,
        affected_count: int = 1,
    ) -> Optional[DeprecatedAPIImpact]:
        if not self.api_kb.is_removed_at_or_after(group, version, kind, target_version):
            return None

        record = self.api_kb.lookup(group, version, kind)
        logger.debug(f"{source.value} API {group}/{version} {kind} removed in {record.removed_in}")
        return DeprecatedAPIImpact(
            group=group,
            version=version,
            kind=kind,
            affected_count=affected_count,
            impact_level=level,
            removed_in=record.removed_in,
            replacement_api=record.replacement_api,
            migration_notes=record.migration_notes,
            source=source,
        )

    def _check_manifest_apis(
        self, usages: List[ObservedAPIUsage], target_version: str
    ) -> List[DeprecatedAPIImpact]:
        # Merge duplicate usages of the same API, keeping first-seen order
        counts: Dict[Tuple[str, str, str], int] = {}
        for usage in usages:
            if usage.origin != APIOrigin.MANIFEST:
                continue
            counts[usage.key] = counts.get(usage.key, 0) + usage.count

        impacts = []
        for (group, version, kind), count in counts.items():
            impact = self._removed_api_impact(
                group,
                version,
                kind,
                target_version,
                ImpactLevel.CRITICAL,
                APIOrigin.MANIFEST,
                affected_count=count,
            )
            if impact:
                impacts.append(impact)
        return impacts

    def _check_crds(
        self, inventory: ClusterInventory, target_version: str
    ) -> List[DeprecatedAPIImpact]:
        impacts = []
        for crd in inventory.crds:
            for version in crd.served_versions:
                impact = self._removed_api_impact(
                    crd.group, version, crd.kind, target_version, ImpactLevel.HIGH, APIOrigin.CRD
                )
                if impact:
                    impacts.append(impact)
        return impacts

    def _check_helm_releases(
        self, inventory: ClusterInventory, target_version: str
    ) -> List[ChartImpact]:
        impacts = []
        for release in inventory.helm_releases:
            recommendation = self.chart_kb.recommend(
                release.chart_name, release.current_chart_version, target_version
            )
            if recommendation.is_compatible:
                continue

            logger.debug(
                f"Chart {release.chart_name} {release.current_chart_version} "
                f"in {release.namespace}: {recommendation.message}"
            )
            impacts.append(
                ChartImpact(
                    chart_name=release.chart_name,
                    release_name=release.release_name,
                    namespace=release.namespace,
                    current_version=release.current_chart_version,
                    recommended_version=recommendation.recommended_version,
                    impact_level=ImpactLevel.HIGH,
                    message=recommendation.message,
                    issues=recommendation.known_issues,
                )
            )
        return impacts
