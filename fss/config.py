"""
FSS Engine Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from fss.constants import (
    KDF_ALGORITHMS,
    KDF_DEFAULT_ALGORITHM,
    KDF_SALT,
    KDF_ITERATIONS,
    KDF_KEY_SIZE,
    ARGON2_TIME_COST,
    ARGON2_MEMORY_COST_KB,
    ARGON2_PARALLELISM,
    MAX_ITERATIONS,
    ESCAPE_RADIUS,
    BASE_COMPLEXITY,
    COMPLEXITY_SIZE_DIVISOR,
    COMPLEXITY_JITTER_RANGE,
    REWARD_NODE_WEIGHT,
    REWARD_POINTS_WEIGHT,
    REWARD_COMPLEXITY_WEIGHT,
)
from fss.errors import InvalidConfigError

logger = logging.getLogger(__name__)

AES_KEY_SIZES = (16, 24, 32)


@dataclass
class KDFConfig:
    """Key derivation configuration."""
    algorithm: str = KDF_DEFAULT_ALGORITHM
    salt: str = KDF_SALT
    iterations: int = KDF_ITERATIONS
    key_size: int = KDF_KEY_SIZE
    time_cost: int = ARGON2_TIME_COST
    memory_cost_kb: int = ARGON2_MEMORY_COST_KB
    parallelism: int = ARGON2_PARALLELISM


@dataclass
class PlacementConfig:
    """Escape-time placement configuration."""
    max_iterations: int = MAX_ITERATIONS
    escape_radius: float = ESCAPE_RADIUS


@dataclass
class RewardConfig:
    """Complexity heuristic and reward formula configuration."""
    base_complexity: int = BASE_COMPLEXITY
    size_divisor: int = COMPLEXITY_SIZE_DIVISOR
    jitter_range: int = COMPLEXITY_JITTER_RANGE
    node_weight: float = REWARD_NODE_WEIGHT
    points_weight: float = REWARD_POINTS_WEIGHT
    complexity_weight: float = REWARD_COMPLEXITY_WEIGHT


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class EngineConfig:
    """
    Complete engine configuration.

    Holds tunables only. Keys and stored records are never part of it.
    """
    kdf: KDFConfig = field(default_factory=KDFConfig)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    reward: RewardConfig = field(default_factory=RewardConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        # KDF validation
        if self.kdf.algorithm not in KDF_ALGORITHMS:
            errors.append(f"Unknown KDF algorithm: {self.kdf.algorithm}")

        if not self.kdf.salt:
            errors.append("KDF salt cannot be empty")

        if self.kdf.iterations < 1:
            errors.append("KDF iterations must be at least 1")

        if self.kdf.key_size not in AES_KEY_SIZES:
            errors.append(f"Invalid key size: {self.kdf.key_size} (expected 16, 24 or 32)")

        # Placement validation
        if self.placement.max_iterations < 1:
            errors.append("max_iterations must be at least 1")

        if self.placement.escape_radius <= 0:
            errors.append("escape_radius must be positive")

        # Reward validation
        if self.reward.base_complexity < 1:
            errors.append("base_complexity must be at least 1")

        if self.reward.size_divisor < 1:
            errors.append("size_divisor must be at least 1")

        if self.reward.jitter_range < 1:
            errors.append("jitter_range must be at least 1")

        return errors

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "EngineConfig":
        """
        Load configuration from file.

        Raises:
            InvalidConfigError: If the file is unreadable or malformed
        """
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidConfigError([f"Cannot read config file {path}: {e}"]) from e

        config = cls.from_dict(data)
        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        """
        Build a config from its dict form; missing sections keep defaults.

        Raises:
            InvalidConfigError: On unknown sections or keys
        """
        if not isinstance(data, dict):
            raise InvalidConfigError([f"Config must be an object, got {type(data).__name__}"])

        sections = {
            "kdf": KDFConfig,
            "placement": PlacementConfig,
            "reward": RewardConfig,
            "log": LogConfig,
        }
        problems = [f"Unknown config section: {name}" for name in data if name not in sections]
        if problems:
            raise InvalidConfigError(problems)

        config = cls()
        for name, section_cls in sections.items():
            if name not in data:
                continue
            values = data[name]
            if not isinstance(values, dict):
                raise InvalidConfigError([f"Config section {name} must be an object"])
            try:
                setattr(config, name, section_cls(**values))
            except TypeError as e:
                raise InvalidConfigError([f"Config section {name}: {e}"]) from e

        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "kdf": asdict(self.kdf),
            "placement": asdict(self.placement),
            "reward": asdict(self.reward),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
