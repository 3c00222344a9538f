"""
FSS Engine Error Handling

All error codes and exception classes.
"""

from enum import IntEnum
from typing import Optional, Any


class ErrorCode(IntEnum):
    """Engine error codes."""

    # 1xxx - General errors
    UNKNOWN_ERROR = 1000
    INVALID_ARGUMENT = 1001
    INVALID_CONFIG = 1002

    # 2xxx - Lifecycle errors
    NOT_INITIALIZED = 2001

    # 3xxx - Crypto errors
    DECRYPTION_FAILED = 3001
    UNSUPPORTED_KDF = 3002

    # 4xxx - Tree errors
    PARENT_NOT_FOUND = 4001
    DUPLICATE_NODE = 4002
    ROOT_EXISTS = 4003


class FSSError(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for UI-facing callers."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# General Errors (1xxx)
# ==============================================================================

class InvalidArgumentError(FSSError):
    def __init__(self, param: str, message: str = ""):
        msg = f"Invalid argument: {param}"
        if message:
            msg += f" - {message}"
        super().__init__(ErrorCode.INVALID_ARGUMENT, msg, {"parameter": param})


class InvalidConfigError(InvalidArgumentError):
    def __init__(self, problems: list):
        super().__init__("config", "; ".join(problems))
        self.code = ErrorCode.INVALID_CONFIG
        self.details = {"parameter": "config", "problems": list(problems)}


# ==============================================================================
# Lifecycle Errors (2xxx)
# ==============================================================================

class NotInitializedError(FSSError):
    def __init__(self, operation: str):
        super().__init__(
            ErrorCode.NOT_INITIALIZED,
            f"Storage not initialized, set up storage first (operation: {operation})",
            {"operation": operation}
        )


# ==============================================================================
# Crypto Errors (3xxx)
# ==============================================================================

class DecryptionError(FSSError):
    def __init__(self, reason: str, node_id: Optional[str] = None):
        details = {"reason": reason}
        if node_id is not None:
            details["node_id"] = node_id
        super().__init__(
            ErrorCode.DECRYPTION_FAILED,
            "Record is unreadable, possibly due to a wrong passphrase",
            details
        )


class UnsupportedKDFError(InvalidArgumentError):
    def __init__(self, algorithm: str):
        super().__init__("kdf.algorithm", f"unsupported algorithm {algorithm!r}")
        self.code = ErrorCode.UNSUPPORTED_KDF


# ==============================================================================
# Tree Errors (4xxx)
# ==============================================================================

class TreeIntegrityError(FSSError):
    pass


class ParentNotFoundError(TreeIntegrityError):
    def __init__(self, node_id: str, parent_id: str):
        super().__init__(
            ErrorCode.PARENT_NOT_FOUND,
            f"Parent {parent_id} of node {node_id} is not in the tree",
            {"node_id": node_id, "parent_id": parent_id}
        )


class DuplicateNodeError(TreeIntegrityError):
    def __init__(self, node_id: str):
        super().__init__(
            ErrorCode.DUPLICATE_NODE,
            f"Node {node_id} already exists",
            {"node_id": node_id}
        )


class RootExistsError(TreeIntegrityError):
    def __init__(self, root_id: str):
        super().__init__(
            ErrorCode.ROOT_EXISTS,
            f"Tree already has root {root_id}",
            {"root_id": root_id}
        )
