"""Loading of knowledge base files."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import KnowledgeBaseLoadError
from ..model.knowledge import ChartInfo, DeprecationRecord
from ..utils.logger import get_logger
from .apis import APIKnowledgeBase
from .charts import ChartKnowledgeBase
from .defaults import DEFAULT_CHARTS, DEFAULT_DEPRECATIONS

logger = get_logger(__name__)


def _read_document(path: Union[str, Path], root_key: str) -> List[Dict[str, Any]]:
    """Read a JSON or YAML knowledge file and return the list under root_key."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read knowledge base {path}: {e}")
        raise KnowledgeBaseLoadError(str(path), f"failed to read file: {e}") from e
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse knowledge base {path}: {e}")
        raise KnowledgeBaseLoadError(str(path), f"failed to parse file: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get(root_key), list):
        raise KnowledgeBaseLoadError(str(path), f"expected a '{root_key}' list")
    return data[root_key]


def parse_deprecations(items: List[Dict[str, Any]], source: Optional[str] = None) -> List[DeprecationRecord]:
    """Validate raw deprecation entries."""
    try:
        return [DeprecationRecord.model_validate(item) for item in items]
    except ValidationError as e:
        raise KnowledgeBaseLoadError(source, f"invalid deprecation record: {e}") from e


def parse_charts(items: List[Dict[str, Any]], source: Optional[str] = None) -> List[ChartInfo]:
    """Validate raw chart entries."""
    try:
        return [ChartInfo.model_validate(item) for item in items]
    except ValidationError as e:
        raise KnowledgeBaseLoadError(source, f"invalid chart entry: {e}") from e


def load_api_knowledge_base(path: Union[str, Path]) -> APIKnowledgeBase:
    """Load API deprecations from a file holding a 'deprecations' list."""
    records = parse_deprecations(_read_document(path, "deprecations"), str(path))
    logger.info(f"Loaded {len(records)} API deprecations from {path}")
    return APIKnowledgeBase(records)


def load_chart_knowledge_base(path: Union[str, Path]) -> ChartKnowledgeBase:
    """Load chart compatibility data from a file holding a 'charts' list."""
    charts = parse_charts(_read_document(path, "charts"), str(path))
    logger.info(f"Loaded {len(charts)} charts from {path}")
    return ChartKnowledgeBase(charts)


def default_api_knowledge_base() -> APIKnowledgeBase:
    """Build the API knowledge base from the built-in data."""
    return APIKnowledgeBase(parse_deprecations(DEFAULT_DEPRECATIONS, "built-in data"))


def default_chart_knowledge_base() -> ChartKnowledgeBase:
    """Build the chart knowledge base from the built-in data."""
    return ChartKnowledgeBase(parse_charts(DEFAULT_CHARTS, "built-in data"))
