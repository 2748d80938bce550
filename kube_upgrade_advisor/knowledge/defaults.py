"""Built-in knowledge data.

API removals are taken from the Kubernetes deprecated API migration guide.
The chart matrix covers a handful of widely deployed charts.
"""

from typing import Any, Dict, List


def _api(
    group: str,
    version: str,
    kinds: List[str],
    deprecated_in: str,
    removed_in: str,
    replacement: str,
    notes: str,
) -> List[Dict[str, Any]]:
    return [
        {
            "group": group,
            "version": version,
            "kind": kind,
            "deprecatedIn": deprecated_in,
            "removedIn": removed_in,
            "replacementAPI": replacement,
            "migrationNotes": notes,
        }
        for kind in kinds
    ]


DEFAULT_DEPRECATIONS: List[Dict[str, Any]] = [
    # Removed in 1.16
    *_api(
        "extensions",
        "v1beta1",
        ["Deployment", "DaemonSet", "ReplicaSet"],
        "1.9",
        "1.16",
        "apps/v1",
        "spec.selector is now required and immutable after creation",
    ),
    *_api(
        "apps",
        "v1beta1",
        ["Deployment", "StatefulSet"],
        "1.9",
        "1.16",
        "apps/v1",
        "spec.selector is now required and immutable after creation",
    ),
    *_api(
        "apps",
        "v1beta2",
        ["Deployment", "DaemonSet", "ReplicaSet", "StatefulSet"],
        "1.9",
        "1.16",
        "apps/v1",
        "spec.selector is now required and immutable after creation",
    ),
    *_api(
        "extensions",
        "v1beta1",
        ["NetworkPolicy"],
        "1.9",
        "1.16",
        "networking.k8s.io/v1",
        "No notable schema changes",
    ),
    # Removed in 1.22
    *_api(
        "extensions",
        "v1beta1",
        ["Ingress"],
        "1.14",
        "1.22",
        "networking.k8s.io/v1",
        "spec.backend is renamed to spec.defaultBackend and pathType is required",
    ),
    *_api(
        "networking.k8s.io",
        "v1beta1",
        ["Ingress"],
        "1.19",
        "1.22",
        "networking.k8s.io/v1",
        "spec.backend is renamed to spec.defaultBackend and pathType is required",
    ),
    *_api(
        "networking.k8s.io",
        "v1beta1",
        ["IngressClass"],
        "1.19",
        "1.22",
        "networking.k8s.io/v1",
        "No notable schema changes",
    ),
    *_api(
        "apiextensions.k8s.io",
        "v1beta1",
        ["CustomResourceDefinition"],
        "1.16",
        "1.22",
        "apiextensions.k8s.io/v1",
        "spec.scope is required and a structural schema is required for each version",
    ),
    *_api(
        "admissionregistration.k8s.io",
        "v1beta1",
        ["MutatingWebhookConfiguration", "ValidatingWebhookConfiguration"],
        "1.16",
        "1.22",
        "admissionregistration.k8s.io/v1",
        "webhooks[*].sideEffects and admissionReviewVersions are required",
    ),
    *_api(
        "apiregistration.k8s.io",
        "v1beta1",
        ["APIService"],
        "1.19",
        "1.22",
        "apiregistration.k8s.io/v1",
        "No notable schema changes",
    ),
    *_api(
        "rbac.authorization.k8s.io",
        "v1beta1",
        ["ClusterRole", "ClusterRoleBinding", "Role", "RoleBinding"],
        "1.17",
        "1.22",
        "rbac.authorization.k8s.io/v1",
        "No notable schema changes",
    ),
    *_api(
        "certificates.k8s.io",
        "v1beta1",
        ["CertificateSigningRequest"],
        "1.19",
        "1.22",
        "certificates.k8s.io/v1",
        "spec.signerName is now required",
    ),
    *_api(
        "coordination.k8s.io",
        "v1beta1",
        ["Lease"],
        "1.19",
        "1.22",
        "coordination.k8s.io/v1",
        "No notable schema changes",
    ),
    *_api(
        "scheduling.k8s.io",
        "v1beta1",
        ["PriorityClass"],
        "1.14",
        "1.22",
        "scheduling.k8s.io/v1",
        "No notable schema changes",
    ),
    *_api(
        "storage.k8s.io",
        "v1beta1",
        ["CSIDriver", "CSINode", "StorageClass", "VolumeAttachment"],
        "1.19",
        "1.22",
        "storage.k8s.io/v1",
        "No notable schema changes",
    ),
    # Removed in 1.25
    *_api(
        "batch",
        "v1beta1",
        ["CronJob"],
        "1.21",
        "1.25",
        "batch/v1",
        "No notable schema changes",
    ),
    *_api(
        "discovery.k8s.io",
        "v1beta1",
        ["EndpointSlice"],
        "1.21",
        "1.25",
        "discovery.k8s.io/v1",
        "Per-endpoint topology field is replaced by nodeName and zone",
    ),
    *_api(
        "events.k8s.io",
        "v1beta1",
        ["Event"],
        "1.19",
        "1.25",
        "events.k8s.io/v1",
        "type is limited to Normal and Warning",
    ),
    *_api(
        "autoscaling",
        "v2beta1",
        ["HorizontalPodAutoscaler"],
        "1.22",
        "1.25",
        "autoscaling/v2",
        "targetAverageUtilization is replaced by target.averageUtilization",
    ),
    *_api(
        "policy",
        "v1beta1",
        ["PodDisruptionBudget"],
        "1.21",
        "1.25",
        "policy/v1",
        "An empty spec.selector now selects all pods in the namespace",
    ),
    *_api(
        "policy",
        "v1beta1",
        ["PodSecurityPolicy"],
        "1.21",
        "1.25",
        "Pod Security Admission",
        "Migrate to Pod Security Standards enforced by namespace labels",
    ),
    *_api(
        "node.k8s.io",
        "v1beta1",
        ["RuntimeClass"],
        "1.20",
        "1.25",
        "node.k8s.io/v1",
        "No notable schema changes",
    ),
    # Removed in 1.26
    *_api(
        "autoscaling",
        "v2beta2",
        ["HorizontalPodAutoscaler"],
        "1.23",
        "1.26",
        "autoscaling/v2",
        "targetAverageUtilization is replaced by target.averageUtilization",
    ),
    *_api(
        "flowcontrol.apiserver.k8s.io",
        "v1beta1",
        ["FlowSchema", "PriorityLevelConfiguration"],
        "1.23",
        "1.26",
        "flowcontrol.apiserver.k8s.io/v1beta3",
        "No notable schema changes",
    ),
    # Removed in 1.27
    *_api(
        "storage.k8s.io",
        "v1beta1",
        ["CSIStorageCapacity"],
        "1.24",
        "1.27",
        "storage.k8s.io/v1",
        "No notable schema changes",
    ),
    # Removed in 1.29
    *_api(
        "flowcontrol.apiserver.k8s.io",
        "v1beta2",
        ["FlowSchema", "PriorityLevelConfiguration"],
        "1.26",
        "1.29",
        "flowcontrol.apiserver.k8s.io/v1",
        "No notable schema changes",
    ),
    # Removed in 1.32
    *_api(
        "flowcontrol.apiserver.k8s.io",
        "v1beta3",
        ["FlowSchema", "PriorityLevelConfiguration"],
        "1.29",
        "1.32",
        "flowcontrol.apiserver.k8s.io/v1",
        "spec.limited.nominalConcurrencyShares defaults to 30 when unset",
    ),
]


DEFAULT_CHARTS: List[Dict[str, Any]] = [
    {
        "chartName": "ingress-nginx",
        "repository": "https://kubernetes.github.io/ingress-nginx",
        "versions": [
            {
                "chartVersion": "3.41.0",
                "compatibleWith": ["1.19", "1.20", "1.21"],
                "knownIssues": ["Uses networking.k8s.io/v1beta1 Ingress"],
            },
            {
                "chartVersion": "4.0.19",
                "compatibleWith": ["1.19", "1.20", "1.21", "1.22", "1.23"],
                "knownIssues": [],
            },
            {
                "chartVersion": "4.4.2",
                "compatibleWith": ["1.22", "1.23", "1.24", "1.25", "1.26"],
                "knownIssues": [],
            },
            {
                "chartVersion": "4.8.3",
                "compatibleWith": ["1.25", "1.26", "1.27", "1.28"],
                "knownIssues": [],
            },
            {
                "chartVersion": "4.11.3",
                "compatibleWith": ["1.27", "1.28", "1.29", "1.30", "1.31"],
                "knownIssues": [],
            },
        ],
    },
    {
        "chartName": "cert-manager",
        "repository": "https://charts.jetstack.io",
        "versions": [
            {
                "chartVersion": "1.5.4",
                "compatibleWith": ["1.18", "1.19", "1.20", "1.21"],
                "knownIssues": ["Ships apiextensions.k8s.io/v1beta1 CRDs"],
            },
            {
                "chartVersion": "1.8.2",
                "compatibleWith": ["1.19", "1.20", "1.21", "1.22", "1.23", "1.24"],
                "knownIssues": [],
            },
            {
                "chartVersion": "1.11.5",
                "compatibleWith": ["1.21", "1.22", "1.23", "1.24", "1.25", "1.26", "1.27"],
                "knownIssues": [],
            },
            {
                "chartVersion": "1.14.4",
                "compatibleWith": ["1.24", "1.25", "1.26", "1.27", "1.28", "1.29"],
                "knownIssues": [],
            },
            {
                "chartVersion": "1.16.1",
                "compatibleWith": ["1.25", "1.26", "1.27", "1.28", "1.29", "1.30", "1.31"],
                "knownIssues": [],
            },
        ],
    },
    {
        "chartName": "prometheus",
        "repository": "https://prometheus-community.github.io/helm-charts",
        "versions": [
            {
                "chartVersion": "15.0.0",
                "compatibleWith": ["1.16", "1.17", "1.18", "1.19", "1.20", "1.21"],
                "knownIssues": ["Uses policy/v1beta1 PodSecurityPolicy"],
            },
            {
                "chartVersion": "20.0.0",
                "compatibleWith": ["1.21", "1.22", "1.23", "1.24"],
                "knownIssues": [],
            },
            {
                "chartVersion": "25.0.0",
                "compatibleWith": ["1.24", "1.25", "1.26", "1.27", "1.28"],
                "knownIssues": [],
            },
        ],
    },
    {
        "chartName": "metrics-server",
        "repository": "https://kubernetes-sigs.github.io/metrics-server",
        "versions": [
            {
                "chartVersion": "3.8.4",
                "compatibleWith": ["1.19", "1.20", "1.21", "1.22", "1.23", "1.24", "1.25"],
                "knownIssues": [],
            },
            {
                "chartVersion": "3.12.2",
                "compatibleWith": ["1.25", "1.26", "1.27", "1.28", "1.29", "1.30", "1.31"],
                "knownIssues": [],
            },
        ],
    },
]
