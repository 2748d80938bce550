"""Upgrade impact report generator."""

import json
from typing import List, Optional

import yaml

from ..model.assessment import DeprecatedAPIImpact, ImpactAssessment
from ..model.plan import UpgradeAssessmentWithPlan, UpgradePlan
from ..model.report import ReportFormat
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ImpactReporter:
    """Renders impact assessments and upgrade plans."""

    def render(
        self,
        assessment: ImpactAssessment,
        plan: Optional[UpgradePlan] = None,
        output_format: ReportFormat = ReportFormat.TEXT,
    ) -> str:
        """Render an assessment and its plan in the requested format."""
        logger.info(f"Generating {output_format.value} impact report")

        if output_format == ReportFormat.JSON:
            response = UpgradeAssessmentWithPlan.combine(assessment, plan)
            return json.dumps(response.model_dump(mode="json"), indent=2)
        elif output_format == ReportFormat.YAML:
            response = UpgradeAssessmentWithPlan.combine(assessment, plan)
            return yaml.dump(
                response.model_dump(mode="json"), default_flow_style=False, sort_keys=False
            )
        else:
            return self._format_text_report(assessment, plan)

    def _format_api_section(
        self, title: str, impacts: List[DeprecatedAPIImpact], lines: List[str]
    ) -> None:
        if not impacts:
            return
        lines.append(f"{title} ({len(impacts)})")
        lines.append("-" * 40)
        for i, api in enumerate(impacts, 1):
            lines.append(f"{i}. {api.group_version} {api.kind}")
            lines.append(f"   Impact: {api.impact_level.value}")
            if api.affected_count > 1:
                lines.append(f"   Affected: {api.affected_count}")
            lines.append(f"   Removed In: v{api.removed_in}")
            lines.append(f"   Replacement: {api.replacement_api}")
            lines.append(f"   Migration: {api.migration_notes}")
            lines.append("")

    def _format_text_report(
        self, assessment: ImpactAssessment, plan: Optional[UpgradePlan]
    ) -> str:
        """Format report as human-readable text."""
        lines = []
        lines.append("=" * 80)
        lines.append("UPGRADE IMPACT ASSESSMENT")
        lines.append("=" * 80)
        lines.append(f"Cluster: {assessment.cluster_id}")
        lines.append(f"Current Version: {assessment.current_version}")
        lines.append(f"Target Version: {assessment.target_version}")
        lines.append(f"Overall Risk: {assessment.overall_risk.value}")
        lines.append(f"Total Issues: {assessment.total_issues}")
        lines.append("")

        self._format_api_section(
            "DEPRECATED MANIFEST APIs", assessment.deprecated_manifest_apis, lines
        )
        self._format_api_section("DEPRECATED CRD APIs", assessment.deprecated_crd_apis, lines)

        if assessment.incompatible_charts:
            lines.append(f"INCOMPATIBLE HELM CHARTS ({len(assessment.incompatible_charts)})")
            lines.append("-" * 40)
            for i, chart in enumerate(assessment.incompatible_charts, 1):
                lines.append(
                    f"{i}. {chart.release_name} ({chart.namespace}): "
                    f"{chart.chart_name} {chart.current_version}"
                )
                lines.append(f"   Recommended: {chart.recommended_version or 'none'}")
                lines.append(f"   {chart.message}")
                for issue in chart.issues:
                    lines.append(f"   ⚠️  {issue}")
                lines.append("")

        if assessment.total_issues == 0:
            lines.append("✅ No deprecated APIs or incompatible charts found. Safe to upgrade!")
            lines.append("")

        if plan and plan.ordered_upgrade_steps:
            lines.append("UPGRADE PLAN")
            lines.append("-" * 40)
            for step in plan.ordered_upgrade_steps:
                lines.append(f"   {step}")
            lines.append("")
            lines.append(f"Estimated Timeline: {plan.timeline}")

        return "\n".join(lines)
