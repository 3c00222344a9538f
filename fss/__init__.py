"""
Fractal Sharded Secure Storage (FSS)

Client-side encrypted record storage with deterministic escape-time
placement and reward accounting. In-memory, one engine per session.
"""

__version__ = "1.0.0"
__author__ = "FSS Engine"

from fss.core.types import AccountCategory, LinkedAccountRecord
from fss.config import EngineConfig
from fss.errors import (
    FSSError,
    InvalidArgumentError,
    NotInitializedError,
    DecryptionError,
)
from fss.state.engine import StorageEngine, StorageStats

__all__ = [
    "AccountCategory",
    "LinkedAccountRecord",
    "EngineConfig",
    "StorageEngine",
    "StorageStats",
    "FSSError",
    "InvalidArgumentError",
    "NotInitializedError",
    "DecryptionError",
    "__version__",
]
