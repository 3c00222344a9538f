"""
FSS Engine Record Serialization

Canonical JSON encoding of linked-account records. The same bytes feed
the content digest (placement) and the cipher, so encoding must be
stable across runs.
"""

from __future__ import annotations
import hashlib
import json

from fss.core.types import LinkedAccountRecord
from fss.errors import InvalidArgumentError


def serialize_record(record: LinkedAccountRecord) -> str:
    """
    Serialize a record to canonical JSON.

    Keys are sorted and separators are compact, so equal records always
    produce identical text.

    Raises:
        InvalidArgumentError: If provider_info holds non-JSON values, or
            values JSON would hand back changed (tuples, non-string keys)
    """
    data = record.to_dict()
    try:
        text = json.dumps(
            data,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError("record", f"not JSON-serializable: {e}") from e

    # retrieve() must give back an equal record
    if json.loads(text) != data:
        raise InvalidArgumentError("record", "provider_info does not survive JSON")
    return text


def deserialize_record(text: str) -> LinkedAccountRecord:
    """Parse canonical JSON back into a record."""
    return LinkedAccountRecord.from_dict(json.loads(text))


def record_digest(serialized: str) -> str:
    """SHA-256 hex digest of serialized record text."""
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()
