"""Cluster inventory access."""

from .store import InMemoryInventoryStore, InventoryStore, SnapshotInventoryStore

__all__ = ["InMemoryInventoryStore", "InventoryStore", "SnapshotInventoryStore"]
