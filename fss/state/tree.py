"""
FSS Engine Storage Tree

In-memory mapping from node id to StorageNode with a single root and
parent/child links. Nodes are only ever added.
"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from fss.constants import ROOT_SENTINEL
from fss.core.types import Coordinate, StorageNode
from fss.crypto.merkle import merkle_root
from fss.errors import DuplicateNodeError, ParentNotFoundError, RootExistsError

logger = logging.getLogger(__name__)


@dataclass
class StorageTree:
    """
    Ownership tree of encrypted shards.

    Invariants:
    - At most one node has no parent (the root)
    - Every parent_id refers to a node in the tree
    - A node id appears in exactly its parent's child_ids
    """
    _nodes: Dict[str, StorageNode] = field(default_factory=dict)
    _root_id: Optional[str] = None

    @property
    def root_id(self) -> Optional[str]:
        return self._root_id

    @property
    def root(self) -> Optional[StorageNode]:
        if self._root_id is None:
            return None
        return self._nodes[self._root_id]

    def has_root(self) -> bool:
        return self._root_id is not None

    def create_root(self, node_id: str, created_at: int) -> StorageNode:
        """
        Create the root node.

        The root carries the sentinel payload, no parent, and sits at the
        center of the plane.

        Raises:
            RootExistsError: If the tree already has a root
        """
        if self._root_id is not None:
            raise RootExistsError(self._root_id)
        if node_id in self._nodes:
            raise DuplicateNodeError(node_id)

        root = StorageNode(
            id=node_id,
            ciphertext=ROOT_SENTINEL,
            parent_id=None,
            child_ids=[],
            complexity=1,
            created_at=created_at,
            iteration=0,
            coordinate=Coordinate(0.0, 0.0),
        )
        self._nodes[node_id] = root
        self._root_id = node_id

        logger.debug(f"Created root node {node_id}")
        return root

    def insert(self, node: StorageNode) -> None:
        """
        Add a node under its parent.

        Raises:
            DuplicateNodeError: If the id is already taken
            RootExistsError: If the node has no parent
            ParentNotFoundError: If the parent is not in the tree
        """
        if node.id in self._nodes:
            raise DuplicateNodeError(node.id)

        if node.parent_id is None:
            # Only create_root() may add a parentless node
            raise RootExistsError(self._root_id or "")

        parent = self._nodes.get(node.parent_id)
        if parent is None:
            raise ParentNotFoundError(node.id, node.parent_id)

        self._nodes[node.id] = node
        parent.child_ids.append(node.id)

    def get(self, node_id: str) -> Optional[StorageNode]:
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def nodes(self) -> Iterator[StorageNode]:
        """Iterate over all nodes, root included."""
        return iter(self._nodes.values())

    def stored_nodes(self) -> List[StorageNode]:
        """All non-root nodes in insertion order."""
        return [n for n in self._nodes.values() if not n.is_root]

    def walk(self) -> Iterator[StorageNode]:
        """Breadth-first traversal from the root."""
        if self._root_id is None:
            return

        queue = deque([self._root_id])
        while queue:
            node = self._nodes.get(queue.popleft())
            if node is None:
                continue
            yield node
            queue.extend(node.child_ids)

    def max_depth(self) -> int:
        """Depth of the deepest node (root alone is 0)."""
        if self._root_id is None:
            return 0

        max_depth = 0
        stack = [(self._root_id, 0)]
        while stack:
            node_id, depth = stack.pop()
            max_depth = max(max_depth, depth)
            node = self._nodes.get(node_id)
            if node is None:
                continue
            for child_id in node.child_ids:
                stack.append((child_id, depth + 1))

        return max_depth

    def root_digest(self) -> bytes:
        """Merkle root over stored node digests in traversal order."""
        return merkle_root([n.digest() for n in self.walk() if not n.is_root])

    def verify(self) -> List[str]:
        """
        Check tree invariants.

        Returns:
            List of violations (empty if consistent)
        """
        errors = []

        roots = [n.id for n in self._nodes.values() if n.parent_id is None]
        if self._nodes and len(roots) != 1:
            errors.append(f"Expected exactly one root, found {len(roots)}")
        if roots and self._root_id not in roots:
            errors.append(f"Recorded root {self._root_id} is not parentless")

        for node in self._nodes.values():
            if node.parent_id is not None:
                parent = self._nodes.get(node.parent_id)
                if parent is None:
                    errors.append(f"Node {node.id} references missing parent {node.parent_id}")
                elif parent.child_ids.count(node.id) != 1:
                    errors.append(f"Node {node.id} not listed exactly once by parent {parent.id}")

            for child_id in node.child_ids:
                child = self._nodes.get(child_id)
                if child is None or child.parent_id != node.id:
                    errors.append(f"Node {node.id} lists foreign child {child_id}")

        reachable = {n.id for n in self.walk()}
        unreachable = set(self._nodes) - reachable
        if unreachable:
            errors.append(f"{len(unreachable)} node(s) unreachable from root")

        if errors:
            logger.debug(f"Tree verification found {len(errors)} problem(s)")
        return errors
