"""Deprecation and chart compatibility knowledge bases."""

from .apis import APIKnowledgeBase
from .charts import ChartKnowledgeBase
from .loader import (
    default_api_knowledge_base,
    default_chart_knowledge_base,
    load_api_knowledge_base,
    load_chart_knowledge_base,
)

__all__ = [
    "APIKnowledgeBase",
    "ChartKnowledgeBase",
    "default_api_knowledge_base",
    "default_chart_knowledge_base",
    "load_api_knowledge_base",
    "load_chart_knowledge_base",
]
