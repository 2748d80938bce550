"""API services for kube-upgrade-advisor."""

from .advisor_service import AdvisorService

__all__ = ["AdvisorService"]
