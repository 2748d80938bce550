"""Upgrade plan generation.

Steps form a directed acyclic graph whose edges come from each step's declared
dependencies. The graph is built fresh for every plan and linearized with
Kahn's algorithm, always taking the lexicographically smallest ready step id
so the same assessment always yields the same order.
"""

import heapq
from collections import defaultdict
from typing import Dict, List

from ..exceptions import CycleDetectedError, PlanGraphError, PlanValidationError
from ..model.assessment import ChartImpact, DeprecatedAPIImpact, ImpactAssessment, ImpactLevel
from ..model.plan import StepAction, StepType, UpgradePlan, UpgradeStep
from ..utils.logger import get_logger

logger = get_logger(__name__)

PRECHECK_ID = "precheck"
BACKUP_ID = "backup"
CLUSTER_UPGRADE_ID = "cluster-upgrade"
VALIDATION_ID = "validation"

MINUTES_PER_STEP = 30


def sanitize_id(value: str) -> str:
    """Create a step id fragment from an arbitrary key."""
    for char in ("/", ".", " "):
        value = value.replace(char, "-")
    return value.lower()


def api_step_id(group: str, version: str, kind: str) -> str:
    """Get the migration step id for an API."""
    key = f"{group or 'core'}/{version}/{kind}"
    return f"migrate-api-{sanitize_id(key)}"


def chart_step_id(chart_name: str) -> str:
    """Get the upgrade step id for a chart."""
    return f"upgrade-chart-{sanitize_id(chart_name)}"


def estimate_timeline(step_count: int) -> str:
    """Estimate the time needed for the upgrade, at 30 minutes per step."""
    hours = (step_count * MINUTES_PER_STEP) // 60
    if hours < 1:
        return "less than 1 hour"
    if hours == 1:
        return "approximately 1 hour"
    return f"approximately {hours} hours"


class StepGraph:
    """Dependency graph of upgrade steps."""

    def __init__(self):
        self.steps: Dict[str, UpgradeStep] = {}
        self.edges: Dict[str, List[str]] = defaultdict(list)

    def add_step(self, step: UpgradeStep) -> None:
        """Add a step and an edge from each of its dependencies."""
        if step.id in self.steps:
            raise PlanGraphError(f"Duplicate step id in upgrade plan: {step.id}")
        self.steps[step.id] = step
        for dependency in step.dependencies:
            self.edges[dependency].append(step.id)

    def __len__(self) -> int:
        return len(self.steps)

    def topological_sort(self) -> List[UpgradeStep]:
        """Linearize the graph, assigning each step its order."""
        for step in self.steps.values():
            for dependency in step.dependencies:
                if dependency not in self.steps:
                    raise PlanValidationError(
                        f"Step {step.id} depends on non-existent step {dependency}"
                    )

        in_degree = {step_id: 0 for step_id in self.steps}
        for targets in self.edges.values():
            for target in targets:
                in_degree[target] += 1

        ready = [step_id for step_id, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)

        ordered: List[UpgradeStep] = []
        while ready:
            current = heapq.heappop(ready)
            ordered.append(self.steps[current].model_copy(update={"order": len(ordered)}))

            for neighbor in self.edges.get(current, []):
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    heapq.heappush(ready, neighbor)

        if len(ordered) != len(self.steps):
            emitted = {step.id for step in ordered}
            raise CycleDetectedError(set(self.steps) - emitted)

        return ordered


class UpgradePlanner:
    """Generates ordered upgrade plans from impact assessments."""

    def generate_plan(self, assessment: ImpactAssessment) -> UpgradePlan:
        """Generate an upgrade plan based on an impact assessment."""
        logger.info(
            f"Planning upgrade of {assessment.cluster_id} "
            f"from {assessment.current_version} to {assessment.target_version}"
        )
        graph = self.build_graph(assessment)
        ordered = graph.topological_sort()

        plan = UpgradePlan(
            from_version=assessment.current_version,
            to_version=assessment.target_version,
            steps=ordered,
            ordered_upgrade_steps=[
                f"{index}. [{step.type.value}] {step.description}"
                for index, step in enumerate(ordered, 1)
            ],
            timeline=estimate_timeline(len(ordered)),
            total_steps=len(ordered),
        )
        logger.info(f"Generated plan with {plan.total_steps} steps ({plan.timeline})")
        return plan

    def build_graph(self, assessment: ImpactAssessment) -> StepGraph:
        """Build the step graph for an assessment."""
        graph = StepGraph()
        graph.add_step(self._precheck_step())
        graph.add_step(self._backup_step())

        migration_steps = self.create_api_migration_steps(assessment)
        migration_ids = [step.id for step in migration_steps]
        for step in migration_steps:
            graph.add_step(step)

        chart_steps = self.create_chart_upgrade_steps(assessment, migration_ids)
        for step in chart_steps:
            graph.add_step(step)

        graph.add_step(
            self._cluster_upgrade_step(
                assessment, migration_ids + [step.id for step in chart_steps]
            )
        )
        graph.add_step(self._validation_step())
        return graph

    def create_api_migration_steps(self, assessment: ImpactAssessment) -> List[UpgradeStep]:
        """Create one migration step per distinct deprecated manifest API.

        APIs whose keys sanitize to the same step id share that step, which
        then migrates each of them.
        """
        by_id: Dict[str, List[DeprecatedAPIImpact]] = {}
        for api in assessment.deprecated_manifest_apis:
            apis = by_id.setdefault(api_step_id(api.group, api.version, api.kind), [])
            if api.key not in [known.key for known in apis]:
                apis.append(api)

        steps = []
        for step_id, apis in by_id.items():
            if len(apis) > 1:
                logger.warning(
                    f"Step {step_id} migrates {len(apis)} APIs with colliding ids: "
                    + ", ".join(f"{api.group_version} {api.kind}" for api in apis)
                )

            actions = []
            for api in apis:
                actions.extend(self._api_actions(api))
            targets = "; ".join(
                f"{api.group_version} {api.kind} to {self._replacement(api)}" for api in apis
            )

            steps.append(
                UpgradeStep(
                    id=step_id,
                    description=f"Migrate {targets}",
                    type=StepType.API_MIGRATION,
                    impact=apis[0].impact_level,
                    dependencies=[BACKUP_ID],
                    actions=actions,
                )
            )
        return steps

    def _replacement(self, api: DeprecatedAPIImpact) -> str:
        return api.replacement_api or "a supported API version"

    def _api_actions(self, api: DeprecatedAPIImpact) -> List[StepAction]:
        kind = api.kind.lower()
        replacement = self._replacement(api)
        return [
            StepAction(
                command=f"kubectl get {kind} --all-namespaces -o yaml > backup-{kind}.yaml",
                description=f"Backup existing {api.kind} resources",
            ),
            StepAction(
                command=f"kubectl convert -f backup-{kind}.yaml --output-version={replacement}",
                description=f"Convert to {replacement}",
            ),
            StepAction(
                command="Manual review required",
                description=api.migration_notes or "Review the converted manifests",
            ),
        ]

    def create_chart_upgrade_steps(
        self, assessment: ImpactAssessment, migration_ids: List[str]
    ) -> List[UpgradeStep]:
        """Create one upgrade step per incompatible chart.

        Chart upgrades run after every API migration, since chart templates
        may reference the migrated APIs.
        """
        by_chart: Dict[str, List[ChartImpact]] = {}
        for chart in assessment.incompatible_charts:
            by_chart.setdefault(chart_step_id(chart.chart_name), []).append(chart)

        steps = []
        for step_id, releases in by_chart.items():
            first = releases[0]
            target = first.recommended_version or "a compatible version"
            if len(releases) == 1:
                description = f"Upgrade {first.chart_name} from {first.current_version} to {target}"
            else:
                description = f"Upgrade {first.chart_name} ({len(releases)} releases) to {target}"

            actions = []
            for chart in releases:
                actions.extend(self._chart_actions(chart))

            steps.append(
                UpgradeStep(
                    id=step_id,
                    description=description,
                    type=StepType.CHART_UPGRADE,
                    impact=first.impact_level,
                    dependencies=[BACKUP_ID] + migration_ids,
                    actions=actions,
                )
            )
        return steps

    def _chart_actions(self, chart: ChartImpact) -> List[StepAction]:
        actions = []
        if chart.recommended_version:
            actions.append(
                StepAction(
                    command=(
                        f"helm upgrade {chart.release_name} {chart.chart_name} "
                        f"--version {chart.recommended_version} -n {chart.namespace}"
                    ),
                    description=f"Upgrade to version {chart.recommended_version}",
                )
            )
        else:
            actions.append(
                StepAction(command="Manual intervention required", description=chart.message)
            )

        if chart.issues:
            actions.append(
                StepAction(command="Review known issues", description="; ".join(chart.issues))
            )
        return actions

    def _precheck_step(self) -> UpgradeStep:
        return UpgradeStep(
            id=PRECHECK_ID,
            description="Pre-upgrade validation and checks",
            type=StepType.PRECHECK,
            impact=ImpactLevel.LOW,
            actions=[
                StepAction(command="kubectl version", description="Verify cluster connectivity"),
                StepAction(command="kubectl get nodes", description="Check node status"),
            ],
        )

    def _backup_step(self) -> UpgradeStep:
        return UpgradeStep(
            id=BACKUP_ID,
            description="Backup cluster state and critical resources",
            type=StepType.BACKUP,
            impact=ImpactLevel.HIGH,
            dependencies=[PRECHECK_ID],
            actions=[
                StepAction(
                    command="velero backup create pre-upgrade-backup --wait",
                    description="Create full cluster backup",
                ),
                StepAction(
                    command="etcdctl snapshot save /backup/etcd-snapshot.db",
                    description="Backup etcd",
                ),
            ],
        )

    def _cluster_upgrade_step(
        self, assessment: ImpactAssessment, remediation_ids: List[str]
    ) -> UpgradeStep:
        return UpgradeStep(
            id=CLUSTER_UPGRADE_ID,
            description=(
                f"Upgrade Kubernetes from {assessment.current_version} "
                f"to {assessment.target_version}"
            ),
            type=StepType.CLUSTER_UPGRADE,
            impact=ImpactLevel.CRITICAL,
            dependencies=[BACKUP_ID] + remediation_ids,
            actions=[
                StepAction(command="kubeadm upgrade plan", description="Review upgrade plan"),
                StepAction(
                    command="kubectl drain <node> --ignore-daemonsets",
                    description="Drain nodes before upgrade",
                ),
                StepAction(
                    command=f"kubeadm upgrade apply {assessment.target_version}",
                    description="Apply Kubernetes upgrade",
                ),
                StepAction(
                    command="kubectl uncordon <node>",
                    description="Uncordon nodes after upgrade",
                ),
            ],
        )

    def _validation_step(self) -> UpgradeStep:
        return UpgradeStep(
            id=VALIDATION_ID,
            description="Post-upgrade validation",
            type=StepType.VALIDATION,
            impact=ImpactLevel.MEDIUM,
            dependencies=[CLUSTER_UPGRADE_ID],
            actions=[
                StepAction(command="kubectl get nodes", description="Verify all nodes are ready"),
                StepAction(
                    command="kubectl get pods --all-namespaces",
                    description="Check all pods are running",
                ),
                StepAction(command="kubectl api-resources", description="Verify API resources"),
            ],
        )

    def validate_plan(self, plan: UpgradePlan) -> None:
        """Check that a plan has steps and every dependency refers to one of them."""
        if not plan.steps:
            raise PlanValidationError("Plan has no steps")

        step_ids = {step.id for step in plan.steps}
        for step in plan.steps:
            for dependency in step.dependencies:
                if dependency not in step_ids:
                    raise PlanValidationError(
                        f"Step {step.id} depends on non-existent step {dependency}"
                    )
