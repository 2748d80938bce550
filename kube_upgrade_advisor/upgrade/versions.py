"""Version comparison helpers.

Cluster versions are compared at major.minor granularity, which is the
granularity Kubernetes deprecation windows are defined at. Chart versions use
their own full-segment ordering in :func:`compare_chart_versions`.
"""

from enum import Enum
from typing import List, Tuple


class VersionOrder(str, Enum):
    """Result of comparing two cluster versions."""

    GREATER = "greater"
    LESS = "less"
    EQUAL = "equal"


def _to_int(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0


def normalize_version(version: str) -> str:
    """Remove the optional 'v' prefix."""
    version = version.strip()
    if version.startswith("v"):
        return version[1:]
    return version


def parse_version(version: str) -> Tuple[int, int]:
    """Parse a cluster version string to a (major, minor) tuple.

    Missing or non-numeric components default to 0.
    """
    parts = normalize_version(version).split(".")
    major = _to_int(parts[0]) if len(parts) > 0 else 0
    minor = _to_int(parts[1]) if len(parts) > 1 else 0
    return major, minor


def is_valid_version(version: str) -> bool:
    """Check that a cluster version has a numeric major and, if given, minor."""
    parts = normalize_version(version).split(".")
    return all(part.isdigit() for part in parts[:2])


def compare_versions(version: str, other: str) -> VersionOrder:
    """Compare two cluster versions by (major, minor), ignoring patch."""
    left = parse_version(version)
    right = parse_version(other)
    if left > right:
        return VersionOrder.GREATER
    if left < right:
        return VersionOrder.LESS
    return VersionOrder.EQUAL


def is_at_least(version: str, floor: str) -> bool:
    """Check that version >= floor at major.minor granularity."""
    return compare_versions(version, floor) != VersionOrder.LESS


def versions_match(version: str, other: str) -> bool:
    """Check that two cluster versions name the same minor release."""
    return compare_versions(version, other) == VersionOrder.EQUAL


def _chart_segments(version: str) -> List[int]:
    return [_to_int(part) for part in normalize_version(version).split(".")]


def compare_chart_versions(version: str, other: str) -> int:
    """Compare two chart versions segment by segment.

    Returns 1 if version > other, -1 if version < other, 0 if equal.
    Missing segments count as 0 and pre-release tags are not interpreted.
    """
    left = _chart_segments(version)
    right = _chart_segments(other)
    length = max(len(left), len(right))
    left += [0] * (length - len(left))
    right += [0] * (length - len(right))

    for a, b in zip(left, right):
        if a > b:
            return 1
        if a < b:
            return -1
    return 0
