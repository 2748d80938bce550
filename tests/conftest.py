"""Test configuration and fixtures."""

import pytest
import yaml

from kube_upgrade_advisor.knowledge import APIKnowledgeBase, ChartKnowledgeBase
from kube_upgrade_advisor.model.inventory import (
    ClusterInventory,
    ObservedAPIUsage,
    ObservedCRD,
    ObservedHelmRelease,
)
from kube_upgrade_advisor.model.knowledge import DeprecationRecord, ChartInfo


@pytest.fixture
def sample_deprecations():
    """Sample API deprecation records."""
    return [
        DeprecationRecord(
            group="networking.k8s.io",
            version="v1beta1",
            kind="Ingress",
            deprecated_in="1.19",
            removed_in="1.22",
            replacement_api="networking.k8s.io/v1",
            migration_notes="pathType is required",
        ),
        DeprecationRecord(
            group="batch",
            version="v1beta1",
            kind="CronJob",
            deprecated_in="1.21",
            removed_in="1.25",
            replacement_api="batch/v1",
            migration_notes="No notable changes",
        ),
        DeprecationRecord(
            group="apiextensions.k8s.io",
            version="v1beta1",
            kind="CustomResourceDefinition",
            deprecated_in="1.16",
            removed_in="1.22",
            replacement_api="apiextensions.k8s.io/v1",
            migration_notes="Structural schema required",
        ),
        DeprecationRecord(
            group="cert-manager.io",
            version="v1alpha2",
            kind="Certificate",
            deprecated_in="1.20",
            removed_in="1.24",
            replacement_api="cert-manager.io/v1",
            migration_notes="Run cmctl upgrade migrate-api-version",
        ),
        DeprecationRecord(
            group="",
            version="v1",
            kind="ComponentStatus",
            deprecated_in="1.19",
            removed_in="1.40",
            replacement_api="",
            migration_notes="Query component health endpoints directly",
        ),
    ]


@pytest.fixture
def sample_charts():
    """Sample chart compatibility matrix."""
    return [
        ChartInfo.model_validate(
            {
                "chartName": "prometheus",
                "versions": [
                    {
                        "chartVersion": "15.0.0",
                        "compatibleWith": ["1.20", "1.21"],
                        "knownIssues": ["Uses PodSecurityPolicy"],
                    },
                    {
                        "chartVersion": "20.0.0",
                        "compatibleWith": ["1.21", "1.22", "1.23", "1.24"],
                        "knownIssues": [],
                    },
                    {
                        "chartVersion": "25.0.0",
                        "compatibleWith": ["1.24", "1.25", "1.26"],
                        "knownIssues": [],
                    },
                    {
                        "chartVersion": "26.0.0",
                        "compatibleWith": ["1.25", "1.26"],
                        "knownIssues": ["Alertmanager fails to start"],
                    },
                ],
            }
        ),
        ChartInfo.model_validate(
            {
                "chartName": "ingress-nginx",
                "versions": [
                    {
                        "chartVersion": "4.0.19",
                        "compatibleWith": ["1.21", "1.22", "1.23"],
                        "knownIssues": [],
                    },
                    {
                        "chartVersion": "4.4.2",
                        "compatibleWith": ["1.23", "1.24", "1.25"],
                        "knownIssues": ["Admission webhook timeout"],
                    },
                ],
            }
        ),
    ]


@pytest.fixture
def api_kb(sample_deprecations):
    """API knowledge base loaded with sample records."""
    return APIKnowledgeBase(sample_deprecations)


@pytest.fixture
def chart_kb(sample_charts):
    """Chart knowledge base loaded with sample charts."""
    return ChartKnowledgeBase(sample_charts)


@pytest.fixture
def sample_inventory():
    """Inventory with a removed manifest API, a removed CRD version and an old chart."""
    return ClusterInventory(
        cluster_id="cluster-1",
        name="production",
        current_version="v1.21.4",
        manifest_apis=[
            ObservedAPIUsage(group="networking.k8s.io", version="v1beta1", kind="Ingress"),
            ObservedAPIUsage(group="networking.k8s.io", version="v1beta1", kind="Ingress"),
            ObservedAPIUsage(group="apps", version="v1", kind="Deployment", count=4),
        ],
        crds=[
            ObservedCRD(
                name="certificates.cert-manager.io",
                group="cert-manager.io",
                kind="Certificate",
                served_versions=["v1alpha2", "v1"],
            )
        ],
        helm_releases=[
            ObservedHelmRelease(
                name="monitoring",
                chart_name="prometheus",
                namespace="monitoring",
                current_chart_version="20.0.0",
            )
        ],
    )


@pytest.fixture
def empty_inventory():
    """Inventory with nothing to remediate."""
    return ClusterInventory(cluster_id="cluster-2", current_version="1.24")


@pytest.fixture
def snapshot_file(tmp_path):
    """Inventory snapshot file with two clusters."""
    data = {
        "clusters": [
            {
                "cluster_id": "cluster-1",
                "name": "production",
                "current_version": "1.21",
                "manifest_apis": [
                    {"apiVersion": "networking.k8s.io/v1beta1", "kind": "Ingress", "count": 2},
                    {"apiVersion": "v1", "kind": "Service"},
                ],
                "crds": [],
                "helm_releases": [
                    {
                        "name": "monitoring",
                        "chart_name": "prometheus",
                        "namespace": "monitoring",
                        "current_chart_version": "20.0.0",
                    }
                ],
            },
            {"cluster_id": "cluster-2", "name": "staging", "current_version": "1.24"},
        ]
    }
    path = tmp_path / "inventory.yaml"
    path.write_text(yaml.dump(data))
    return path
