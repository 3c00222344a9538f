"""
FSS Engine Core Types

Linked-account records supplied by callers, and the node records the
storage tree keeps for them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
import hashlib

from fss.constants import HASH_SIZE
from fss.errors import InvalidArgumentError


class AccountCategory(str, Enum):
    """Closed set of linked-account kinds."""
    BITCOIN = "bitcoin"
    ETHEREUM = "ethereum"
    COINBASE = "coinbase"
    PLAID = "plaid"

    @classmethod
    def parse(cls, value: Any) -> AccountCategory:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(
                "category",
                f"expected one of {[c.value for c in cls]}, got {value!r}"
            ) from None


@dataclass
class LinkedAccountRecord:
    """
    Flat record produced by the account-linking collaborator.

    The engine serializes, hashes and encrypts it as an opaque payload;
    only `category` is read, for complexity and statistics.
    """
    category: AccountCategory
    timestamp: int
    address: Optional[str] = None
    public_key: Optional[str] = None
    account_id: Optional[str] = None
    provider_info: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.category = AccountCategory.parse(self.category)

    def to_dict(self) -> Dict[str, Any]:
        """Export as a JSON-compatible dict, omitting unset optional fields."""
        data: Dict[str, Any] = {
            "category": self.category.value,
            "timestamp": self.timestamp,
        }
        if self.address is not None:
            data["address"] = self.address
        if self.public_key is not None:
            data["public_key"] = self.public_key
        if self.account_id is not None:
            data["account_id"] = self.account_id
        if self.provider_info:
            data["provider_info"] = self.provider_info
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LinkedAccountRecord:
        if not isinstance(data, dict):
            raise InvalidArgumentError("record", f"expected an object, got {type(data).__name__}")
        if "category" not in data:
            raise InvalidArgumentError("record", "missing 'category'")
        if "timestamp" not in data:
            raise InvalidArgumentError("record", "missing 'timestamp'")

        return cls(
            category=AccountCategory.parse(data["category"]),
            timestamp=data["timestamp"],
            address=data.get("address"),
            public_key=data.get("public_key"),
            account_id=data.get("account_id"),
            provider_info=dict(data.get("provider_info") or {}),
        )


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Point in the bounded placement plane."""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class SymmetricKey:
    """
    Derived session key.

    NOTE: Held in memory only, never serialized.
    """
    data: bytes

    def __post_init__(self):
        if not self.data:
            raise ValueError("SymmetricKey data must not be empty")

    def __repr__(self) -> str:
        # Never expose key material
        return f"SymmetricKey(size={len(self.data)}, data=<redacted>)"

    def __len__(self) -> int:
        return len(self.data)

    def fingerprint(self) -> str:
        """Short identifier for comparing keys without revealing them."""
        return hashlib.sha256(b"fss-key-fingerprint:" + self.data).hexdigest()[:16]


@dataclass(frozen=True, slots=True)
class StorageNode:
    """
    One shard of the storage tree.

    Every field except `child_ids` is fixed at creation; `child_ids` only
    ever grows.
    """
    id: str
    ciphertext: bytes
    parent_id: Optional[str]
    child_ids: List[str]
    complexity: int
    created_at: int
    iteration: int
    coordinate: Coordinate

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def digest(self) -> bytes:
        """SHA-256 of the stored ciphertext."""
        return hashlib.sha256(self.ciphertext).digest()

    def to_dict(self) -> Dict[str, Any]:
        """Placement metadata; ciphertext is reported by digest only."""
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "child_ids": list(self.child_ids),
            "complexity": self.complexity,
            "created_at": self.created_at,
            "iteration": self.iteration,
            "coordinate": self.coordinate.to_dict(),
            "digest": self.digest().hex(),
        }


def zero_digest() -> bytes:
    """Digest reported for a tree with nothing stored."""
    return bytes(HASH_SIZE)
