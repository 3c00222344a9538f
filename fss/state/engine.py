"""
FSS Engine Storage Engine

Session-scoped secure storage: derives a key from a passphrase, places
each record in the address space, encrypts it and hangs it under the
root of the storage tree.

Each engine instance owns its key and tree exclusively. All public
operations run under one re-entrant lock, so a store (insert, child
append, points update) is atomic to concurrent readers.
"""

from __future__ import annotations
import json
import logging
import threading
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from fss.config import EngineConfig
from fss.constants import ROOT_DIGEST_DISPLAY_CHARS
from fss.core.serialization import serialize_record, deserialize_record, record_digest
from fss.core.types import AccountCategory, LinkedAccountRecord, StorageNode, SymmetricKey
from fss.crypto.cipher import encrypt, decrypt
from fss.crypto.kdf import derive_key
from fss.errors import (
    DecryptionError,
    FSSError,
    InvalidArgumentError,
    InvalidConfigError,
    NotInitializedError,
)
from fss.placement.escape_time import place
from fss.rewards.complexity import RandomSource, compute_storage_complexity
from fss.rewards.score import RewardAccountant
from fss.state.tree import StorageTree

logger = logging.getLogger(__name__)


@dataclass
class DecryptResult:
    """Outcome of decrypting one stored node."""
    node_id: str
    record: Optional[LinkedAccountRecord] = None
    error: Optional[DecryptionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class StorageStats:
    """Snapshot of engine statistics."""
    total_nodes: int
    counts_by_category: Dict[str, int]
    storage_points: int
    complexity_score_percent: float
    last_update: str
    max_depth: int = 0
    root_digest: str = ""
    unreadable_nodes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_nodes": self.total_nodes,
            "counts_by_category": dict(self.counts_by_category),
            "storage_points": self.storage_points,
            "complexity_score_percent": self.complexity_score_percent,
            "last_update": self.last_update,
            "max_depth": self.max_depth,
            "root_digest": self.root_digest,
            "unreadable_nodes": self.unreadable_nodes,
        }


def _new_node_id() -> str:
    return str(uuid.uuid4())


class StorageEngine:
    """
    Fractal sharded secure storage for linked-account records.

    Lifecycle:
    - initialize(passphrase) derives the key and creates the root once
    - store() is the only other mutation
    - retrieve(), export_all(), stats() decrypt on demand
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Callable[[], float]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Args:
            config: Engine tunables (defaults to EngineConfig())
            rng: Source of complexity jitter; pass a seeded Random to pin it
            clock: Seconds-since-epoch callable used for timestamps
            id_factory: Node id generator (uuid4 strings by default)

        Raises:
            InvalidConfigError: If config.validate() reports problems
        """
        self.config = config or EngineConfig()
        problems = self.config.validate()
        if problems:
            raise InvalidConfigError(problems)

        self._rng = rng
        self._clock = clock or time.time
        self._new_id = id_factory or _new_node_id
        self._lock = threading.RLock()

        self._key: Optional[SymmetricKey] = None
        self._tree = StorageTree()
        self._accountant = RewardAccountant(
            reward=self.config.reward,
            placement=self.config.placement,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, passphrase: str) -> None:
        """
        Derive the session key and create the root if absent.

        Re-initializing re-derives the key but keeps the existing root,
        its children and the accumulated storage points.

        Raises:
            InvalidArgumentError: If the passphrase is empty
        """
        key = derive_key(passphrase, self.config.kdf)

        with self._lock:
            if self._key is not None:
                if key.fingerprint() != self._key.fingerprint() and self._tree.stored_nodes():
                    logger.warning(
                        "Re-initialized with a different passphrase; "
                        f"{len(self._tree.stored_nodes())} stored node(s) will be unreadable"
                    )
                else:
                    logger.info("Storage key re-derived")

            self._key = key

            if not self._tree.has_root():
                root = self._tree.create_root(self._new_id(), self._now_ms())
                logger.info(f"Fractal storage initialized, root {root.id}")

    def is_initialized(self) -> bool:
        with self._lock:
            return self._key is not None and self._tree.has_root()

    def _require_initialized(self, operation: str) -> SymmetricKey:
        if self._key is None or not self._tree.has_root():
            raise NotInitializedError(operation)
        return self._key

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def store(self, record: Union[LinkedAccountRecord, Dict[str, Any]]) -> str:
        """
        Encrypt a record and add it as a child of the root.

        Args:
            record: Record, or its dict form

        Returns:
            Id of the new node

        Raises:
            NotInitializedError: If initialize() has not been called
            InvalidArgumentError: If the record cannot be serialized
        """
        with self._lock:
            key = self._require_initialized("store")

            if isinstance(record, dict):
                record = LinkedAccountRecord.from_dict(record)
            elif not isinstance(record, LinkedAccountRecord):
                raise InvalidArgumentError(
                    "record", f"expected LinkedAccountRecord, got {type(record).__name__}"
                )

            serialized = serialize_record(record)
            digest = record_digest(serialized)

            complexity = compute_storage_complexity(
                record, serialized, self.config.reward, self._rng
            )
            placement = place(digest, self.config.placement)
            ciphertext = encrypt(serialized.encode("utf-8"), key)

            node = StorageNode(
                id=self._new_id(),
                ciphertext=ciphertext,
                parent_id=self._tree.root_id,
                child_ids=[],
                complexity=complexity,
                created_at=self._now_ms(),
                iteration=placement.iteration,
                coordinate=placement.coordinate,
            )
            self._tree.insert(node)
            self._accountant.record(complexity)

            logger.info(
                f"Stored {record.category.value} record as {node.id} "
                f"(complexity={complexity}, iteration={placement.iteration})"
            )
            return node.id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def retrieve(self, node_id: str) -> Optional[LinkedAccountRecord]:
        """
        Decrypt one stored record.

        Returns:
            The record, or None if no stored node has this id

        Raises:
            NotInitializedError: If initialize() has not been called
            DecryptionError: If the node cannot be decrypted
        """
        with self._lock:
            key = self._require_initialized("retrieve")

            node = self._tree.get(node_id)
            if node is None or node.is_root:
                return None

            return self._open(node, key)

    def contains(self, node_id: str) -> bool:
        """Check for a stored (non-root) node without decrypting it."""
        with self._lock:
            self._require_initialized("contains")
            node = self._tree.get(node_id)
            return node is not None and not node.is_root

    def node_ids(self) -> List[str]:
        """Ids of all stored nodes in insertion order."""
        with self._lock:
            self._require_initialized("node_ids")
            return [n.id for n in self._tree.stored_nodes()]

    def node_info(self, node_id: str) -> Optional[Dict[str, Any]]:
        """Placement metadata for a node, without decrypting it."""
        with self._lock:
            self._require_initialized("node_info")
            node = self._tree.get(node_id)
            return node.to_dict() if node is not None else None

    def export_all(self) -> List[LinkedAccountRecord]:
        """
        Decrypt every stored record, best effort.

        Nodes that fail to decrypt are logged and left out.

        Raises:
            NotInitializedError: If initialize() has not been called
        """
        with self._lock:
            key = self._require_initialized("export_all")
            results = self._open_all(key)

        return [r.record for r in results if r.ok]

    def stats(self) -> StorageStats:
        """
        Compute storage statistics.

        Works before initialize(), reporting an empty store.
        """
        with self._lock:
            stored = self._tree.stored_nodes()
            counts = {c.value: 0 for c in AccountCategory}
            unreadable = 0

            if self._key is not None:
                for result in self._open_all(self._key):
                    if result.ok:
                        counts[result.record.category.value] += 1
                    else:
                        unreadable += 1

            digest = self._tree.root_digest().hex()

            return StorageStats(
                total_nodes=len(stored),
                counts_by_category=counts,
                storage_points=self._accountant.storage_points,
                complexity_score_percent=self._accountant.complexity_score(stored),
                last_update=self._now_iso(),
                max_depth=self._tree.max_depth(),
                root_digest=digest[:ROOT_DIGEST_DISPLAY_CHARS] + "...",
                unreadable_nodes=unreadable,
            )

    def reward_balance(self) -> float:
        """Reward balance recomputed from the current tree."""
        with self._lock:
            return self._accountant.balance(self._tree.nodes())

    @property
    def storage_points(self) -> int:
        with self._lock:
            return self._accountant.storage_points

    def max_depth(self) -> int:
        with self._lock:
            return self._tree.max_depth()

    def verify_integrity(self) -> List[str]:
        """
        Check tree and accounting invariants.

        Returns:
            List of violations (empty if consistent)
        """
        with self._lock:
            errors = self._tree.verify()

            expected = sum(n.complexity for n in self._tree.stored_nodes())
            if expected != self._accountant.storage_points:
                errors.append(
                    f"storage_points {self._accountant.storage_points} != "
                    f"sum of complexity {expected}"
                )

            return errors

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _open(self, node: StorageNode, key: SymmetricKey) -> LinkedAccountRecord:
        try:
            plaintext = decrypt(node.ciphertext, key)
        except DecryptionError as e:
            raise DecryptionError(e.details["reason"], node_id=node.id) from e

        try:
            return deserialize_record(plaintext.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError, FSSError) as e:
            raise DecryptionError(f"undecodable plaintext: {e}", node_id=node.id) from e

    def _open_all(self, key: SymmetricKey) -> List[DecryptResult]:
        results = []
        for node in self._tree.stored_nodes():
            try:
                results.append(DecryptResult(node.id, record=self._open(node, key)))
            except DecryptionError as e:
                logger.warning(f"Skipping node {node.id}: {e.details.get('reason')}")
                results.append(DecryptResult(node.id, error=e))
        return results

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _now_iso(self) -> str:
        return datetime.fromtimestamp(self._clock(), tz=timezone.utc).isoformat()
