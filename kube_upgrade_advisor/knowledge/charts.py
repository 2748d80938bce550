"""Helm chart compatibility knowledge base."""

from typing import Dict, Iterable, List, Optional, Tuple

from ..model.knowledge import ChartCompatibilityEntry, ChartInfo, ChartRecommendation
from ..upgrade.versions import compare_chart_versions, is_valid_version, versions_match
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _supports(entry: ChartCompatibilityEntry, cluster_version: str) -> bool:
    """Check if a chart release lists the cluster version as compatible.

    Entries that are not numeric versions never match.
    """
    return any(
        is_valid_version(candidate) and versions_match(candidate, cluster_version)
        for candidate in entry.compatible_with
    )


class ChartKnowledgeBase:
    """In-memory lookup of per-chart compatibility matrices.

    Charts or chart versions that are not catalogued are assumed compatible.
    """

    def __init__(self, charts: Optional[Iterable[ChartInfo]] = None):
        self._charts: Dict[str, ChartInfo] = {}
        if charts is not None:
            self.load(charts)

    def load(self, charts: Iterable[ChartInfo]) -> None:
        """Index charts by name."""
        for chart in charts:
            self._charts[chart.chart_name] = chart
        logger.debug(f"Chart knowledge base holds {len(self._charts)} charts")

    def __len__(self) -> int:
        return len(self._charts)

    def lookup(self, chart_name: str) -> Optional[ChartInfo]:
        """Get the catalogued information for a chart."""
        return self._charts.get(chart_name)

    def _find_entry(self, chart: ChartInfo, chart_version: str) -> Optional[ChartCompatibilityEntry]:
        for entry in chart.versions:
            if entry.chart_version == chart_version:
                return entry
        return None

    def check_compatibility(
        self, chart_name: str, chart_version: str, cluster_version: str
    ) -> Tuple[bool, List[str]]:
        """Check if a chart version is compatible with a cluster version."""
        chart = self.lookup(chart_name)
        if chart is None:
            return True, []

        entry = self._find_entry(chart, chart_version)
        if entry is None:
            return True, []

        return _supports(entry, cluster_version), list(entry.known_issues)

    def recommend(
        self, chart_name: str, current_version: str, target_cluster_version: str
    ) -> ChartRecommendation:
        """Recommend a chart version for the target cluster version.

        Only issue-free releases are ever recommended. When none supports the
        target version the recommendation reports incompatibility instead.
        """
        chart = self.lookup(chart_name)
        if chart is None:
            return ChartRecommendation(
                chart_name=chart_name,
                current_version=current_version,
                is_compatible=True,
                message="Chart not in knowledge base - compatibility unknown",
            )

        current_issues: List[str] = []
        current = self._find_entry(chart, current_version)
        if current is not None and _supports(current, target_cluster_version):
            current_issues = list(current.known_issues)
            if not current_issues:
                return ChartRecommendation(
                    chart_name=chart_name,
                    current_version=current_version,
                    is_compatible=True,
                    message="Current version is compatible",
                )

        best = self._best_issue_free(chart, target_cluster_version)
        if best is not None:
            return ChartRecommendation(
                chart_name=chart_name,
                current_version=current_version,
                recommended_version=best.chart_version,
                is_compatible=False,
                message=f"Upgrade required for Kubernetes {target_cluster_version}",
                known_issues=current_issues,
            )

        return ChartRecommendation(
            chart_name=chart_name,
            current_version=current_version,
            is_compatible=False,
            message=f"No compatible version found for Kubernetes {target_cluster_version}",
            known_issues=current_issues,
        )

    def get_recommended_version(self, chart_name: str, cluster_version: str) -> str:
        """Get the latest issue-free chart version for a cluster version."""
        chart = self.lookup(chart_name)
        if chart is None:
            return ""
        best = self._best_issue_free(chart, cluster_version)
        return best.chart_version if best else ""

    def _best_issue_free(
        self, chart: ChartInfo, cluster_version: str
    ) -> Optional[ChartCompatibilityEntry]:
        best: Optional[ChartCompatibilityEntry] = None
        for entry in chart.versions:
            if entry.known_issues or not _supports(entry, cluster_version):
                continue
            # First entry wins among equal versions
            if best is None or compare_chart_versions(entry.chart_version, best.chart_version) > 0:
                best = entry
        return best
