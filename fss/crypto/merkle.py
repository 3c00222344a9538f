"""
FSS Engine Merkle Root

Binary Merkle tree with SHA-256 over stored node digests. Gives the
storage tree a single commitment value that changes whenever a shard
is added.
"""

from __future__ import annotations
import hashlib
from typing import List

from fss.core.types import zero_digest


def is_power_of_two(n: int) -> bool:
    """Check if n is a power of 2."""
    return n > 0 and (n & (n - 1)) == 0


def merkle_root(digests: List[bytes]) -> bytes:
    """
    Compute Merkle root from a list of 32-byte digests.

    - Empty list returns the zero digest
    - Single element returns that element
    - Otherwise, pad to power of 2 and build tree bottom-up

    Args:
        digests: Leaf digests, in tree order

    Returns:
        Merkle root digest
    """
    if len(digests) == 0:
        return zero_digest()

    if len(digests) == 1:
        return digests[0]

    leaves = list(digests)

    # Pad to power of 2 by duplicating last element
    while not is_power_of_two(len(leaves)):
        leaves.append(leaves[-1])

    while len(leaves) > 1:
        leaves = [
            hashlib.sha256(leaves[i] + leaves[i + 1]).digest()
            for i in range(0, len(leaves), 2)
        ]

    return leaves[0]
