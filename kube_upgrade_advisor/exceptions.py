"""Error types raised by the upgrade advisor."""

from typing import Iterable, List, Optional


class AdvisorError(Exception):
    """Base exception for upgrade advisor errors."""

    pass


class KnowledgeBaseLoadError(AdvisorError):
    """Raised when a knowledge base file cannot be read or parsed."""

    def __init__(self, path: Optional[str], reason: str):
        self.path = path
        self.reason = reason
        where = f" from {path}" if path else ""
        super().__init__(f"Failed to load knowledge base{where}: {reason}")


class ClusterNotFoundError(AdvisorError, LookupError):
    """Raised when the inventory has no record for a cluster id."""

    def __init__(self, cluster_id: str):
        self.cluster_id = cluster_id
        super().__init__(f"Cluster not found in inventory: {cluster_id}")


class PlanGraphError(AdvisorError):
    """Base exception for upgrade step graph integrity errors."""

    pass


class CycleDetectedError(PlanGraphError):
    """Raised when the step graph cannot be linearized."""

    def __init__(self, unresolved: Iterable[str]):
        self.unresolved: List[str] = sorted(unresolved)
        super().__init__(
            "Cycle detected in dependency graph: " + ", ".join(self.unresolved)
        )


class PlanValidationError(PlanGraphError):
    """Raised when a generated plan is empty or references unknown steps."""

    pass
