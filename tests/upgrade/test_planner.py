"""Test upgrade plan generation."""

import pytest
from pydantic import ValidationError

from kube_upgrade_advisor.exceptions import (
    CycleDetectedError,
    PlanGraphError,
    PlanValidationError,
)
from kube_upgrade_advisor.model.assessment import (
    ChartImpact,
    DeprecatedAPIImpact,
    ImpactAssessment,
    ImpactLevel,
)
from kube_upgrade_advisor.model.inventory import APIOrigin
from kube_upgrade_advisor.model.plan import StepType, UpgradePlan, UpgradeStep
from kube_upgrade_advisor.upgrade.planner import (
    StepGraph,
    UpgradePlanner,
    estimate_timeline,
    sanitize_id,
)


def _api_impact(group, version, kind, replacement=""):
    return DeprecatedAPIImpact(
        group=group,
        version=version,
        kind=kind,
        impact_level=ImpactLevel.CRITICAL,
        removed_in="1.22",
        replacement_api=replacement,
        migration_notes="Review manifests",
        source=APIOrigin.MANIFEST,
    )


def _chart_impact(name, recommended="2.0.0", namespace="default", release=None, issues=None):
    return ChartImpact(
        chart_name=name,
        release_name=release or name,
        namespace=namespace,
        current_version="1.0.0",
        recommended_version=recommended,
        message="Upgrade required for Kubernetes 1.25",
        issues=issues or [],
    )


def _assessment(apis=None, charts=None):
    apis = apis or []
    charts = charts or []
    return ImpactAssessment(
        cluster_id="cluster-1",
        current_version="1.21",
        target_version="1.25",
        deprecated_manifest_apis=apis,
        incompatible_charts=charts,
        overall_risk=ImpactLevel.CRITICAL if apis else ImpactLevel.NONE,
        total_issues=len(apis) + len(charts),
    )


class TestGeneratePlan:
    def setup_method(self):
        """Set up test fixtures."""
        self.planner = UpgradePlanner()

    def test_empty_assessment_has_skeleton(self):
        """Test an assessment without issues yields the four fixed steps."""
        plan = self.planner.generate_plan(_assessment())

        assert [step.id for step in plan.steps] == [
            "precheck",
            "backup",
            "cluster-upgrade",
            "validation",
        ]
        assert plan.total_steps == 4
        assert plan.from_version == "1.21"
        assert plan.to_version == "1.25"

    def test_api_migration_step(self):
        """Test a removed manifest API yields a migration step."""
        assessment = _assessment(
            apis=[_api_impact("networking.k8s.io", "v1beta1", "Ingress", "networking.k8s.io/v1")]
        )
        plan = self.planner.generate_plan(assessment)

        ids = [step.id for step in plan.steps]
        assert ids == [
            "precheck",
            "backup",
            "migrate-api-networking-k8s-io-v1beta1-ingress",
            "cluster-upgrade",
            "validation",
        ]
        migration = plan.steps[2]
        assert migration.type == StepType.API_MIGRATION
        assert migration.dependencies == ("backup",)
        assert migration.description == (
            "Migrate networking.k8s.io/v1beta1 Ingress to networking.k8s.io/v1"
        )

    def test_duplicate_api_impacts_share_a_step(self):
        """Test migration steps are created per distinct API."""
        api = _api_impact("batch", "v1beta1", "CronJob", "batch/v1")
        plan = self.planner.generate_plan(_assessment(apis=[api, api]))

        assert plan.total_steps == 5

    def test_colliding_api_ids_share_a_step(self):
        """Test distinct APIs with the same step id are all migrated."""
        assessment = _assessment(
            apis=[
                _api_impact("example.com", "v1", "Foo", "example.com/v2"),
                _api_impact("example-com", "v1", "Foo", "example-com/v2"),
            ]
        )
        plan = self.planner.generate_plan(assessment)
        step = next(s for s in plan.steps if s.id == "migrate-api-example-com-v1-foo")

        assert plan.total_steps == 5
        assert step.description == (
            "Migrate example.com/v1 Foo to example.com/v2; example-com/v1 Foo to example-com/v2"
        )
        assert len(step.actions) == 6
        assert step.actions[1].description == "Convert to example.com/v2"
        assert step.actions[4].description == "Convert to example-com/v2"

    def test_core_group_step_id(self):
        """Test the core group is named in the step id."""
        plan = self.planner.generate_plan(_assessment(apis=[_api_impact("", "v1", "Foo")]))

        assert "migrate-api-core-v1-foo" in [step.id for step in plan.steps]

    def test_chart_steps_follow_all_migrations(self):
        """Test chart upgrades depend on backup and every API migration."""
        assessment = _assessment(
            apis=[
                _api_impact("networking.k8s.io", "v1beta1", "Ingress"),
                _api_impact("batch", "v1beta1", "CronJob"),
            ],
            charts=[_chart_impact("prometheus"), _chart_impact("cert-manager")],
        )
        plan = self.planner.generate_plan(assessment)
        by_id = {step.id: step for step in plan.steps}

        chart_step = by_id["upgrade-chart-prometheus"]
        assert chart_step.type == StepType.CHART_UPGRADE
        assert set(chart_step.dependencies) == {
            "backup",
            "migrate-api-networking-k8s-io-v1beta1-ingress",
            "migrate-api-batch-v1beta1-cronjob",
        }
        assert set(by_id["cluster-upgrade"].dependencies) == {
            "backup",
            "migrate-api-networking-k8s-io-v1beta1-ingress",
            "migrate-api-batch-v1beta1-cronjob",
            "upgrade-chart-prometheus",
            "upgrade-chart-cert-manager",
        }

    def test_order_respects_dependencies(self):
        """Test every step appears after all of its dependencies."""
        assessment = _assessment(
            apis=[_api_impact("apps", "v1beta1", "Deployment")],
            charts=[_chart_impact("a-chart"), _chart_impact("z-chart")],
        )
        plan = self.planner.generate_plan(assessment)
        position = {step.id: step.order for step in plan.steps}

        for step in plan.steps:
            for dependency in step.dependencies:
                assert position[dependency] < position[step.id]
        assert [step.order for step in plan.steps] == list(range(len(plan.steps)))

    def test_lexicographic_tie_break(self):
        """Test simultaneously ready steps are taken in id order."""
        assessment = _assessment(
            apis=[
                _api_impact("policy", "v1beta1", "PodDisruptionBudget"),
                _api_impact("batch", "v1beta1", "CronJob"),
            ],
            charts=[_chart_impact("zookeeper"), _chart_impact("airflow")],
        )
        plan = self.planner.generate_plan(assessment)

        assert [step.id for step in plan.steps] == [
            "precheck",
            "backup",
            "migrate-api-batch-v1beta1-cronjob",
            "migrate-api-policy-v1beta1-poddisruptionbudget",
            "upgrade-chart-airflow",
            "upgrade-chart-zookeeper",
            "cluster-upgrade",
            "validation",
        ]

    def test_step_count_matches_skeleton(self):
        """Test no step is dropped by the sort."""
        apis = [_api_impact("g", f"v{i}", "Kind") for i in range(5)]
        charts = [_chart_impact(f"chart-{i}") for i in range(3)]
        plan = self.planner.generate_plan(_assessment(apis=apis, charts=charts))

        assert plan.total_steps == 2 + 5 + 3 + 2
        assert plan.steps[0].id == "precheck"
        assert plan.steps[-1].id == "validation"

    def test_deterministic(self):
        """Test planning the same assessment twice gives identical output."""
        assessment = _assessment(
            apis=[
                _api_impact("networking.k8s.io", "v1beta1", "Ingress"),
                _api_impact("batch", "v1beta1", "CronJob"),
            ],
            charts=[_chart_impact("prometheus")],
        )
        first = self.planner.generate_plan(assessment)
        second = self.planner.generate_plan(assessment)

        assert first.ordered_upgrade_steps == second.ordered_upgrade_steps
        assert first.model_dump_json() == second.model_dump_json()

    def test_no_state_between_calls(self):
        """Test a previous plan does not leak into the next."""
        self.planner.generate_plan(
            _assessment(apis=[_api_impact("batch", "v1beta1", "CronJob")])
        )
        plan = self.planner.generate_plan(_assessment())

        assert plan.total_steps == 4

    def test_ordered_upgrade_steps_rendering(self):
        """Test the one-line summary of each step."""
        plan = self.planner.generate_plan(_assessment())

        assert plan.ordered_upgrade_steps[0] == "1. [precheck] Pre-upgrade validation and checks"
        assert plan.ordered_upgrade_steps[2] == (
            "3. [cluster_upgrade] Upgrade Kubernetes from 1.21 to 1.25"
        )

    def test_chart_actions(self):
        """Test chart steps carry helm commands and known issues."""
        assessment = _assessment(
            charts=[
                _chart_impact(
                    "prometheus",
                    recommended="25.0.0",
                    namespace="monitoring",
                    release="metrics",
                    issues=["Alertmanager fails to start"],
                )
            ]
        )
        plan = self.planner.generate_plan(assessment)
        step = next(s for s in plan.steps if s.id == "upgrade-chart-prometheus")

        assert step.actions[0].command == (
            "helm upgrade metrics prometheus --version 25.0.0 -n monitoring"
        )
        assert step.actions[1].description == "Alertmanager fails to start"

    def test_chart_without_recommendation(self):
        """Test charts with no compatible version need manual intervention."""
        chart = _chart_impact("legacy", recommended=None)
        plan = self.planner.generate_plan(_assessment(charts=[chart]))
        step = next(s for s in plan.steps if s.id == "upgrade-chart-legacy")

        assert step.actions[0].command == "Manual intervention required"

    def test_releases_of_one_chart_share_a_step(self):
        """Test several releases of a chart are upgraded in one step."""
        assessment = _assessment(
            charts=[
                _chart_impact("redis", namespace="cache", release="cache"),
                _chart_impact("redis", namespace="sessions", release="sessions"),
            ]
        )
        plan = self.planner.generate_plan(assessment)
        step = next(s for s in plan.steps if s.id == "upgrade-chart-redis")

        assert plan.total_steps == 5
        assert len(step.actions) == 2

    def test_plan_is_immutable(self):
        """Test a generated plan and its steps cannot be changed."""
        plan = self.planner.generate_plan(
            _assessment(apis=[_api_impact("batch", "v1beta1", "CronJob")])
        )
        step = plan.steps[0]

        with pytest.raises(ValidationError):
            step.order = 99
        with pytest.raises(ValidationError):
            step.actions[0].command = "kubectl version --client"
        with pytest.raises(AttributeError):
            plan.steps.append(step)
        with pytest.raises(AttributeError):
            plan.ordered_upgrade_steps.append("6. [validation] Again")
        with pytest.raises(AttributeError):
            plan.steps[2].dependencies.append("precheck")
        assert step.order == 0
        assert plan.total_steps == len(plan.steps) == 5

    def test_plan_is_valid(self):
        """Test generated plans pass validation."""
        assessment = _assessment(
            apis=[_api_impact("batch", "v1beta1", "CronJob")],
            charts=[_chart_impact("prometheus")],
        )
        self.planner.validate_plan(self.planner.generate_plan(assessment))


class TestValidatePlan:
    def setup_method(self):
        """Set up test fixtures."""
        self.planner = UpgradePlanner()

    def test_empty_plan(self):
        """Test an empty plan is rejected."""
        plan = UpgradePlan(from_version="1.21", to_version="1.25", timeline="less than 1 hour")

        with pytest.raises(PlanValidationError, match="no steps"):
            self.planner.validate_plan(plan)

    def test_dangling_dependency(self):
        """Test a dependency on a missing step is rejected."""
        step = UpgradeStep(
            id="validation",
            description="Post-upgrade validation",
            type=StepType.VALIDATION,
            impact=ImpactLevel.MEDIUM,
            dependencies=["cluster-upgrade"],
        )
        plan = UpgradePlan(
            from_version="1.21", to_version="1.25", steps=[step], timeline="less than 1 hour"
        )

        with pytest.raises(PlanValidationError, match="non-existent step cluster-upgrade"):
            self.planner.validate_plan(plan)


class TestStepGraph:
    def _step(self, step_id, dependencies=None):
        return UpgradeStep(
            id=step_id,
            description=step_id,
            type=StepType.PRECHECK,
            impact=ImpactLevel.LOW,
            dependencies=dependencies or [],
        )

    def test_cycle_detected(self):
        """Test a cyclic graph cannot be sorted."""
        graph = StepGraph()
        graph.add_step(self._step("a", ["c"]))
        graph.add_step(self._step("b", ["a"]))
        graph.add_step(self._step("c", ["b"]))
        graph.add_step(self._step("d"))

        with pytest.raises(CycleDetectedError) as exc_info:
            graph.topological_sort()
        assert exc_info.value.unresolved == ["a", "b", "c"]

    def test_dangling_dependency(self):
        """Test sorting rejects references to unknown steps."""
        graph = StepGraph()
        graph.add_step(self._step("a", ["missing"]))

        with pytest.raises(PlanValidationError):
            graph.topological_sort()

    def test_duplicate_step(self):
        """Test step ids must be unique."""
        graph = StepGraph()
        graph.add_step(self._step("a"))

        with pytest.raises(PlanGraphError):
            graph.add_step(self._step("a"))

    def test_order_unset_before_sort(self):
        """Test steps have no order until sorted."""
        graph = StepGraph()
        graph.add_step(self._step("b"))
        graph.add_step(self._step("a"))

        assert all(step.order is None for step in graph.steps.values())
        assert [(s.id, s.order) for s in graph.topological_sort()] == [("a", 0), ("b", 1)]


class TestHelpers:
    @pytest.mark.parametrize(
        "count,expected",
        [
            (1, "less than 1 hour"),
            (2, "approximately 1 hour"),
            (3, "approximately 1 hour"),
            (4, "approximately 2 hours"),
            (9, "approximately 4 hours"),
        ],
    )
    def test_estimate_timeline(self, count, expected):
        """Test the coarse timeline estimate."""
        assert estimate_timeline(count) == expected

    def test_sanitize_id(self):
        """Test id sanitization."""
        assert sanitize_id("networking.k8s.io/v1beta1/Ingress") == (
            "networking-k8s-io-v1beta1-ingress"
        )
        assert sanitize_id("My Chart") == "my-chart"
