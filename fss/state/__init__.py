"""
FSS Engine State

Storage tree and the engine that owns it.
"""

from fss.state.tree import StorageTree
from fss.state.engine import (
    StorageEngine,
    StorageStats,
    DecryptResult,
)

__all__ = [
    # Tree
    "StorageTree",
    # Engine
    "StorageEngine",
    "StorageStats",
    "DecryptResult",
]
