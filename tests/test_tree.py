"""
FSS Engine Storage Tree Tests
"""

import pytest

from fss.constants import ROOT_SENTINEL
from fss.core.types import Coordinate, StorageNode
from fss.errors import DuplicateNodeError, ParentNotFoundError, RootExistsError
from fss.state.tree import StorageTree


def _node(node_id, parent_id, ciphertext=None):
    return StorageNode(
        id=node_id,
        ciphertext=ciphertext or node_id.encode(),
        parent_id=parent_id,
        child_ids=[],
        complexity=6,
        created_at=0,
        iteration=10,
        coordinate=Coordinate(0.1, 0.2),
    )


@pytest.fixture
def tree() -> StorageTree:
    t = StorageTree()
    t.create_root("root", created_at=0)
    return t


class TestRoot:
    """Tests for root creation."""

    def test_empty_tree(self):
        """Test a fresh tree has no root."""
        t = StorageTree()
        assert not t.has_root()
        assert t.root is None
        assert len(t) == 0
        assert t.max_depth() == 0
        assert list(t.walk()) == []

    def test_create_root(self, tree):
        """Test root carries the sentinel and no parent."""
        root = tree.root
        assert root.id == "root"
        assert root.parent_id is None
        assert root.child_ids == []
        assert root.ciphertext == ROOT_SENTINEL
        assert root.iteration == 0

    def test_second_root_rejected(self, tree):
        """Test a tree never gets two roots."""
        with pytest.raises(RootExistsError):
            tree.create_root("root-2", created_at=0)

    def test_parentless_insert_rejected(self, tree):
        """Test insert() cannot add another root."""
        with pytest.raises(RootExistsError):
            tree.insert(_node("orphan", None))


class TestInsert:
    """Tests for node insertion."""

    def test_links_parent(self, tree):
        """Test insert appends to the parent's children."""
        tree.insert(_node("a", "root"))
        tree.insert(_node("b", "root"))
        assert tree.root.child_ids == ["a", "b"]
        assert "a" in tree and len(tree) == 3

    def test_missing_parent(self, tree):
        """Test a dangling parent reference is refused."""
        with pytest.raises(ParentNotFoundError):
            tree.insert(_node("a", "ghost"))
        assert "a" not in tree

    def test_duplicate_id(self, tree):
        """Test ids are unique."""
        tree.insert(_node("a", "root"))
        with pytest.raises(DuplicateNodeError):
            tree.insert(_node("a", "root"))
        assert tree.root.child_ids == ["a"]

    def test_stored_nodes_excludes_root(self, tree):
        """Test stored_nodes lists only non-root nodes in order."""
        tree.insert(_node("a", "root"))
        tree.insert(_node("b", "root"))
        assert [n.id for n in tree.stored_nodes()] == ["a", "b"]


class TestTraversal:
    """Tests for walk, depth and digest."""

    def test_walk_breadth_first(self, tree):
        """Test traversal visits levels in order."""
        tree.insert(_node("a", "root"))
        tree.insert(_node("b", "root"))
        tree.insert(_node("a1", "a"))
        assert [n.id for n in tree.walk()] == ["root", "a", "b", "a1"]

    def test_max_depth(self, tree):
        """Test depth counts edges from the root."""
        assert tree.max_depth() == 0
        tree.insert(_node("a", "root"))
        assert tree.max_depth() == 1
        tree.insert(_node("a1", "a"))
        tree.insert(_node("a11", "a1"))
        assert tree.max_depth() == 3

    def test_root_digest_changes(self, tree):
        """Test the digest commits to stored shards."""
        empty = tree.root_digest()
        assert empty == bytes(32)
        tree.insert(_node("a", "root"))
        one = tree.root_digest()
        tree.insert(_node("b", "root"))
        assert len({empty, one, tree.root_digest()}) == 3


class TestVerify:
    """Tests for invariant checking."""

    def test_consistent(self, tree):
        """Test a normally built tree verifies clean."""
        tree.insert(_node("a", "root"))
        tree.insert(_node("a1", "a"))
        assert tree.verify() == []

    def test_detects_missing_parent(self, tree):
        """Test a dangling parent is reported."""
        tree._nodes["x"] = _node("x", "ghost")
        problems = tree.verify()
        assert any("missing parent" in p for p in problems)
        assert any("unreachable" in p for p in problems)

    def test_detects_unlisted_child(self, tree):
        """Test a node its parent does not list is reported."""
        tree._nodes["x"] = _node("x", "root")
        assert any("not listed" in p for p in tree.verify())

    def test_detects_foreign_child(self, tree):
        """Test a child id with no matching node is reported."""
        tree.root.child_ids.append("ghost")
        assert any("foreign child" in p for p in tree.verify())

    def test_detects_second_root(self, tree):
        """Test a second parentless node is reported."""
        tree._nodes["x"] = _node("x", None)
        assert any("exactly one root" in p for p in tree.verify())
