"""
FSS Engine Type Tests
"""

import dataclasses
import json

import pytest

from fss.core.serialization import serialize_record, deserialize_record, record_digest
from fss.core.types import (
    AccountCategory,
    Coordinate,
    LinkedAccountRecord,
    StorageNode,
    SymmetricKey,
)
from fss.errors import InvalidArgumentError


class TestAccountCategory:
    """Tests for AccountCategory."""

    def test_parse_string(self):
        """Test parsing a category tag."""
        assert AccountCategory.parse("plaid") is AccountCategory.PLAID

    def test_parse_member(self):
        """Test parsing passes members through."""
        assert AccountCategory.parse(AccountCategory.BITCOIN) is AccountCategory.BITCOIN

    def test_parse_unknown(self):
        """Test unknown tags are rejected."""
        with pytest.raises(InvalidArgumentError):
            AccountCategory.parse("dogecoin")


class TestLinkedAccountRecord:
    """Tests for LinkedAccountRecord."""

    def test_category_coerced(self):
        """Test string categories become enum members."""
        record = LinkedAccountRecord(category="ethereum", timestamp=1)
        assert record.category is AccountCategory.ETHEREUM

    def test_to_dict_omits_unset(self, bitcoin_record):
        """Test unset optional fields are left out."""
        data = bitcoin_record.to_dict()
        assert data["category"] == "bitcoin"
        assert "public_key" not in data
        assert "provider_info" not in data

    def test_dict_round_trip(self, plaid_record):
        """Test from_dict(to_dict()) reproduces the record."""
        assert LinkedAccountRecord.from_dict(plaid_record.to_dict()) == plaid_record

    def test_from_dict_missing_category(self):
        """Test a record without category is rejected."""
        with pytest.raises(InvalidArgumentError):
            LinkedAccountRecord.from_dict({"timestamp": 1})

    def test_from_dict_missing_timestamp(self):
        """Test a record without timestamp is rejected."""
        with pytest.raises(InvalidArgumentError):
            LinkedAccountRecord.from_dict({"category": "plaid"})

    def test_from_dict_not_object(self):
        """Test non-dict input is rejected."""
        with pytest.raises(InvalidArgumentError):
            LinkedAccountRecord.from_dict(["plaid", 1])


class TestSerialization:
    """Tests for canonical record serialization."""

    def test_sorted_compact(self, coinbase_record):
        """Test output is key-sorted with compact separators."""
        text = serialize_record(coinbase_record)
        assert ", " not in text and ": " not in text
        assert list(json.loads(text)) == sorted(json.loads(text))

    def test_equal_records_equal_text(self, plaid_record):
        """Test equal records serialize identically."""
        clone = LinkedAccountRecord.from_dict(plaid_record.to_dict())
        assert serialize_record(clone) == serialize_record(plaid_record)

    def test_round_trip(self, all_records):
        """Test deserialize(serialize(r)) == r."""
        for record in all_records:
            assert deserialize_record(serialize_record(record)) == record

    def test_unserializable_provider_info(self):
        """Test non-JSON provider data is an argument error."""
        record = LinkedAccountRecord(category="plaid", timestamp=1, provider_info={"x": object()})
        with pytest.raises(InvalidArgumentError):
            serialize_record(record)

    @pytest.mark.parametrize("provider_info", [
        {"scopes": ("a", "b")},
        {1: "x"},
        {"nested": {"ids": (1, 2)}},
    ])
    def test_lossy_provider_info_rejected(self, provider_info):
        """Test values JSON would change (tuples, int keys) are refused."""
        record = LinkedAccountRecord(category="plaid", timestamp=1, provider_info=provider_info)
        with pytest.raises(InvalidArgumentError) as exc_info:
            serialize_record(record)
        assert "does not survive JSON" in str(exc_info.value)

    def test_digest_is_sha256_hex(self, bitcoin_record):
        """Test digest format and stability."""
        text = serialize_record(bitcoin_record)
        digest = record_digest(text)
        assert len(digest) == 64
        assert digest == record_digest(text)
        int(digest, 16)


class TestSymmetricKey:
    """Tests for SymmetricKey."""

    def test_repr_redacted(self):
        """Test key material never appears in repr."""
        key = SymmetricKey(bytes(range(32)))
        assert "redacted" in repr(key)
        assert bytes(range(32)).hex() not in repr(key)

    def test_empty_rejected(self):
        """Test empty key data is rejected."""
        with pytest.raises(ValueError):
            SymmetricKey(b"")

    def test_fingerprint(self):
        """Test fingerprints distinguish keys."""
        assert SymmetricKey(b"a" * 32).fingerprint() != SymmetricKey(b"b" * 32).fingerprint()


class TestStorageNode:
    """Tests for StorageNode."""

    def _node(self, parent_id="root"):
        return StorageNode(
            id="n1",
            ciphertext=b"\x01payload",
            parent_id=parent_id,
            child_ids=[],
            complexity=7,
            created_at=1,
            iteration=3,
            coordinate=Coordinate(0.25, -0.5),
        )

    def test_immutable_fields(self):
        """Test placement fields cannot be reassigned."""
        node = self._node()
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.complexity = 99
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.coordinate = Coordinate(0, 0)

    def test_children_grow(self):
        """Test child_ids can be appended."""
        node = self._node()
        node.child_ids.append("n2")
        assert node.child_ids == ["n2"]

    def test_is_root(self):
        """Test only parentless nodes are roots."""
        assert self._node(parent_id=None).is_root
        assert not self._node().is_root

    def test_to_dict_hides_ciphertext(self):
        """Test metadata export carries a digest, not the payload."""
        data = self._node().to_dict()
        assert "ciphertext" not in data
        assert len(data["digest"]) == 64
        assert data["coordinate"] == {"x": 0.25, "y": -0.5}
