"""
FSS Engine Key Derivation

Turns a passphrase into the session key. Output is deterministic for a
given passphrase and config: the engine keeps no key store and re-derives
the key on every initialize().

- PBKDF2-HMAC-SHA256 (default)
- Argon2id (requires the `crypto` extra: argon2-cffi)
"""

from __future__ import annotations
import logging
from typing import Optional

from Crypto.Hash import SHA256
from Crypto.Protocol.KDF import PBKDF2

from fss.config import KDFConfig
from fss.constants import KDF_ALGORITHM_PBKDF2, KDF_ALGORITHM_ARGON2ID
from fss.core.types import SymmetricKey
from fss.errors import InvalidArgumentError, UnsupportedKDFError

logger = logging.getLogger(__name__)


def derive_key(passphrase: str, config: Optional[KDFConfig] = None) -> SymmetricKey:
    """
    Derive a fixed-length symmetric key from a passphrase.

    Args:
        passphrase: User-provided master key (non-empty)
        config: KDF parameters (defaults to KDFConfig())

    Returns:
        SymmetricKey of config.key_size bytes

    Raises:
        InvalidArgumentError: If the passphrase is empty or not a string
        UnsupportedKDFError: If config names an unknown algorithm
    """
    if not isinstance(passphrase, str):
        raise InvalidArgumentError("passphrase", "master key must be a string")
    if not passphrase:
        raise InvalidArgumentError("passphrase", "master key is required")

    if config is None:
        config = KDFConfig()

    secret = passphrase.encode("utf-8")
    salt = config.salt.encode("utf-8")

    if config.algorithm == KDF_ALGORITHM_PBKDF2:
        data = PBKDF2(
            secret,
            salt,
            dkLen=config.key_size,
            count=config.iterations,
            hmac_hash_module=SHA256,
        )
    elif config.algorithm == KDF_ALGORITHM_ARGON2ID:
        data = _derive_argon2id(secret, salt, config)
    else:
        raise UnsupportedKDFError(config.algorithm)

    logger.debug(f"Derived {config.key_size}-byte key with {config.algorithm}")
    return SymmetricKey(data)


def _derive_argon2id(secret: bytes, salt: bytes, config: KDFConfig) -> bytes:
    from argon2.low_level import hash_secret_raw, Type

    # Argon2 requires at least 8 bytes of salt
    if len(salt) < 8:
        raise InvalidArgumentError("kdf.salt", "argon2id needs a salt of at least 8 bytes")

    return hash_secret_raw(
        secret=secret,
        salt=salt,
        time_cost=config.time_cost,
        memory_cost=config.memory_cost_kb,
        parallelism=config.parallelism,
        hash_len=config.key_size,
        type=Type.ID
    )


def get_kdf_info(config: Optional[KDFConfig] = None) -> dict:
    """Get information about the key derivation setup."""
    if config is None:
        config = KDFConfig()
    return {
        "algorithm": config.algorithm,
        "iterations": config.iterations,
        "key_size": config.key_size,
        "hash": "SHA-256",
        "deterministic": True,
    }
