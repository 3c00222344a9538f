"""
FSS Engine Core Data Structures
"""

from fss.core.types import (
    AccountCategory,
    LinkedAccountRecord,
    Coordinate,
    SymmetricKey,
    StorageNode,
)
from fss.core.serialization import (
    serialize_record,
    deserialize_record,
    record_digest,
)

__all__ = [
    # Types
    "AccountCategory",
    "LinkedAccountRecord",
    "Coordinate",
    "SymmetricKey",
    "StorageNode",
    # Serialization
    "serialize_record",
    "deserialize_record",
    "record_digest",
]
