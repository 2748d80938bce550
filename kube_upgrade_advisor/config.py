"""Advisor settings."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

DEFAULT_CLUSTER_ID = "cluster-1"


class AdvisorSettings(BaseModel):
    """Runtime configuration for the advisor.

    Knowledge base paths left unset select the built-in knowledge data.
    """

    api_knowledge_path: Optional[Path] = None
    chart_knowledge_path: Optional[Path] = None
    inventory_path: Optional[Path] = None
    default_cluster_id: str = DEFAULT_CLUSTER_ID
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AdvisorSettings":
        """Build settings from environment variables."""
        values = {}
        env_map = {
            "api_knowledge_path": "API_KNOWLEDGE_PATH",
            "chart_knowledge_path": "CHART_KNOWLEDGE_PATH",
            "inventory_path": "INVENTORY_PATH",
            "default_cluster_id": "CLUSTER_ID",
            "log_level": "LOG_LEVEL",
        }
        for field, env_var in env_map.items():
            value = os.environ.get(env_var)
            if value:
                values[field] = value
        return cls(**values)
