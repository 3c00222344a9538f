"""
FSS Engine Symmetric Cipher

AES-256-GCM authenticated encryption of serialized records.

Format: version (1) || nonce (12) || ciphertext || tag (16)
"""

from __future__ import annotations
import logging

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from fss.constants import (
    CIPHER_VERSION,
    CIPHER_NONCE_SIZE,
    CIPHER_TAG_SIZE,
    CIPHER_HEADER_SIZE,
)
from fss.core.types import SymmetricKey
from fss.errors import DecryptionError

logger = logging.getLogger(__name__)


def encrypt(plaintext: bytes, key: SymmetricKey) -> bytes:
    """
    Encrypt data with AES-GCM under the session key.

    A fresh random nonce is drawn per call, so encrypting the same
    plaintext twice yields different ciphertexts.

    Args:
        plaintext: Data to encrypt
        key: Derived session key

    Returns:
        Encrypted blob with header, nonce and auth tag
    """
    nonce = get_random_bytes(CIPHER_NONCE_SIZE)
    cipher = AES.new(key.data, AES.MODE_GCM, nonce=nonce)
    ciphertext, tag = cipher.encrypt_and_digest(plaintext)
    return bytes([CIPHER_VERSION]) + nonce + ciphertext + tag


def decrypt(encrypted: bytes, key: SymmetricKey) -> bytes:
    """
    Decrypt data produced by encrypt().

    Args:
        encrypted: Blob from encrypt()
        key: Derived session key

    Returns:
        Decrypted plaintext

    Raises:
        DecryptionError: If the key is wrong or the blob is corrupted
    """
    if len(encrypted) < CIPHER_HEADER_SIZE + CIPHER_TAG_SIZE:
        raise DecryptionError("ciphertext too short")

    version = encrypted[0]
    if version != CIPHER_VERSION:
        raise DecryptionError(f"unknown cipher version {version}")

    nonce = encrypted[1:CIPHER_HEADER_SIZE]
    ciphertext = encrypted[CIPHER_HEADER_SIZE:-CIPHER_TAG_SIZE]
    tag = encrypted[-CIPHER_TAG_SIZE:]

    cipher = AES.new(key.data, AES.MODE_GCM, nonce=nonce)
    try:
        return cipher.decrypt_and_verify(ciphertext, tag)
    except ValueError as e:
        logger.debug(f"Authentication failed: {e}")
        raise DecryptionError("authentication failed") from e
