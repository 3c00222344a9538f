"""
FSS Engine Cryptographic Primitives
"""

from fss.crypto.kdf import derive_key
from fss.crypto.cipher import encrypt, decrypt
from fss.crypto.merkle import merkle_root

__all__ = [
    # Key derivation
    "derive_key",
    # Cipher
    "encrypt",
    "decrypt",
    # Merkle tree
    "merkle_root",
]
