"""Kubernetes API deprecation knowledge base."""

from typing import Dict, Iterable, List, Optional, Tuple

from ..model.knowledge import DeprecationRecord
from ..upgrade.versions import is_at_least
from ..utils.logger import get_logger

logger = get_logger(__name__)

APIKey = Tuple[str, str, str]


class APIKnowledgeBase:
    """In-memory lookup of API deprecation records keyed by (group, version, kind).

    A missing record means the API is not known to be deprecated and is
    treated as compatible.
    """

    def __init__(self, records: Optional[Iterable[DeprecationRecord]] = None):
        self._deprecations: Dict[APIKey, DeprecationRecord] = {}
        if records is not None:
            self.load(records)

    def load(self, records: Iterable[DeprecationRecord]) -> None:
        """Index deprecation records by their exact key."""
        for record in records:
            if record.key in self._deprecations:
                logger.debug(f"Replacing duplicate deprecation record for {record.key}")
            self._deprecations[record.key] = record
        logger.debug(f"API knowledge base holds {len(self._deprecations)} deprecations")

    def __len__(self) -> int:
        return len(self._deprecations)

    def lookup(self, group: str, version: str, kind: str) -> Optional[DeprecationRecord]:
        """Get the deprecation record for an exact (group, version, kind)."""
        return self._deprecations.get((group, version, kind))

    def is_removed_at_or_after(
        self, group: str, version: str, kind: str, target_version: str
    ) -> bool:
        """Check if an API is removed in the target Kubernetes version."""
        record = self.lookup(group, version, kind)
        if record is None:
            return False
        return is_at_least(target_version, record.removed_in)

    def is_deprecated_but_not_removed(
        self, group: str, version: str, kind: str, target_version: str
    ) -> bool:
        """Check if an API is deprecated but still served in the target version."""
        record = self.lookup(group, version, kind)
        if record is None:
            return False
        deprecated = is_at_least(target_version, record.deprecated_in)
        removed = is_at_least(target_version, record.removed_in)
        return deprecated and not removed

    def get_removal_version(self, group: str, version: str, kind: str) -> str:
        """Get the version an API is removed in, or an empty string."""
        record = self.lookup(group, version, kind)
        return record.removed_in if record else ""

    def get_replacement_api(self, group: str, version: str, kind: str) -> str:
        """Get the replacement for a deprecated API, or an empty string."""
        record = self.lookup(group, version, kind)
        return record.replacement_api if record else ""

    def all_records(self) -> List[DeprecationRecord]:
        """Get the effective records in first-load order of their keys."""
        return list(self._deprecations.values())
