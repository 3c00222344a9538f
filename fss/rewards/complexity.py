"""
FSS Engine Storage Complexity

Integer weight assigned to each stored record:

    complexity = base + len(serialized) // size_divisor
               + category bonus + jitter

The jitter is drawn from an injectable random source, so two stores of
the same record can receive different complexity values while their
placement stays identical.
"""

from __future__ import annotations
import random
from typing import Optional, Protocol

from fss.config import RewardConfig
from fss.constants import CATEGORY_COMPLEXITY_BONUS
from fss.core.types import AccountCategory, LinkedAccountRecord

_uncovered = {c.value for c in AccountCategory} - set(CATEGORY_COMPLEXITY_BONUS)
if _uncovered:
    raise RuntimeError(f"No complexity bonus defined for categories: {sorted(_uncovered)}")


class RandomSource(Protocol):
    """Anything with random.Random's randrange()."""

    def randrange(self, stop: int) -> int:
        ...


def category_bonus(category: AccountCategory) -> int:
    """Fixed complexity bonus for a record category."""
    return CATEGORY_COMPLEXITY_BONUS[AccountCategory(category).value]


def compute_storage_complexity(
    record: LinkedAccountRecord,
    serialized: str,
    config: Optional[RewardConfig] = None,
    rng: Optional[RandomSource] = None
) -> int:
    """
    Compute the complexity weight of a record.

    Args:
        record: Record being stored (only its category is read)
        serialized: Canonical serialization of the record
        config: Heuristic parameters
        rng: Source for the jitter term (defaults to module random)

    Returns:
        Non-negative complexity weight
    """
    if config is None:
        config = RewardConfig()
    if rng is None:
        rng = random

    complexity = config.base_complexity

    # Larger payloads cost more to hold
    complexity += len(serialized) // config.size_divisor

    complexity += category_bonus(record.category)

    complexity += rng.randrange(config.jitter_range)

    return complexity


def complexity_bounds(serialized_length: int, category: AccountCategory,
                      config: Optional[RewardConfig] = None) -> tuple:
    """Inclusive (min, max) complexity possible for a payload."""
    if config is None:
        config = RewardConfig()
    low = config.base_complexity + serialized_length // config.size_divisor + category_bonus(category)
    return low, low + config.jitter_range - 1
