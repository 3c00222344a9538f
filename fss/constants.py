"""
FSS Engine Constants

All engine constants defined here for single source of truth.
"""

from typing import Final, Dict

# ==============================================================================
# KEY DERIVATION CONSTANTS
# ==============================================================================

KDF_ALGORITHM_PBKDF2: Final[str] = "pbkdf2"
KDF_ALGORITHM_ARGON2ID: Final[str] = "argon2id"
KDF_ALGORITHMS: Final[tuple] = (KDF_ALGORITHM_PBKDF2, KDF_ALGORITHM_ARGON2ID)

KDF_DEFAULT_ALGORITHM: Final[str] = KDF_ALGORITHM_PBKDF2
KDF_SALT: Final[str] = "aetherion-quantum-secure-salt"   # Application salt (fixed)
KDF_ITERATIONS: Final[int] = 1000               # PBKDF2 rounds
KDF_KEY_SIZE: Final[int] = 32                   # 256-bit key

# Argon2id parameters (only used when algorithm == "argon2id")
ARGON2_TIME_COST: Final[int] = 3
ARGON2_MEMORY_COST_KB: Final[int] = 65536       # 64 MB
ARGON2_PARALLELISM: Final[int] = 4

# ==============================================================================
# CIPHER CONSTANTS
# ==============================================================================

CIPHER_NAME: Final[str] = "AES-256-GCM"
CIPHER_VERSION: Final[int] = 1
CIPHER_NONCE_SIZE: Final[int] = 12
CIPHER_TAG_SIZE: Final[int] = 16
CIPHER_HEADER_SIZE: Final[int] = 1 + CIPHER_NONCE_SIZE

# Root node payload; never decrypted
ROOT_SENTINEL: Final[bytes] = b"root"

# ==============================================================================
# PLACEMENT CONSTANTS
# ==============================================================================

MAX_ITERATIONS: Final[int] = 1000               # Escape-time bound
ESCAPE_RADIUS: Final[float] = 2.0

# Address space
X_MIN: Final[float] = -2.0
X_MAX: Final[float] = 1.0
Y_MIN: Final[float] = -1.0
Y_MAX: Final[float] = 1.0

COORDINATE_HEX_DIGITS: Final[int] = 8           # Hex chars per axis (32 bits)
COORDINATE_SCALE: Final[int] = 0xFFFFFFFF

# ==============================================================================
# REWARD CONSTANTS
# ==============================================================================

BASE_COMPLEXITY: Final[int] = 5                 # Complexity unit per shard
COMPLEXITY_SIZE_DIVISOR: Final[int] = 100       # +1 per 100 serialized chars
COMPLEXITY_JITTER_RANGE: Final[int] = 3         # Random bonus in [0, 3)

# Per-category bonus, keyed by AccountCategory value
CATEGORY_COMPLEXITY_BONUS: Final[Dict[str, int]] = {
    "bitcoin": 1,
    "ethereum": 2,
    "coinbase": 1,
    "plaid": 3,
}

REWARD_NODE_WEIGHT: Final[float] = 0.01
REWARD_POINTS_WEIGHT: Final[float] = 0.05
REWARD_COMPLEXITY_WEIGHT: Final[float] = 0.1
REWARD_DECIMALS: Final[int] = 2

COMPLEXITY_SCORE_MAX: Final[float] = 100.0

# ==============================================================================
# STATISTICS CONSTANTS
# ==============================================================================

ROOT_DIGEST_DISPLAY_CHARS: Final[int] = 16
HASH_SIZE: Final[int] = 32
