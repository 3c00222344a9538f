"""
FSS Engine Rewards

Per-record complexity and aggregate reward accounting.
"""

from fss.rewards.complexity import (
    RandomSource,
    category_bonus,
    compute_storage_complexity,
)
from fss.rewards.score import (
    RewardAccountant,
    compute_complexity_score,
    compute_reward_balance,
    get_reward_info,
)

__all__ = [
    # Complexity
    "RandomSource",
    "category_bonus",
    "compute_storage_complexity",
    # Score
    "RewardAccountant",
    "compute_complexity_score",
    "compute_reward_balance",
    "get_reward_info",
]
