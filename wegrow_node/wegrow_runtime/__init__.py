"""
WeGrow runtime: document store, points ledger and economy operations.
"""

from .atomic_store import AtomicDocumentStore
from .economy import Economy

__all__ = ["AtomicDocumentStore", "Economy"]
