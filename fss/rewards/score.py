"""
FSS Engine Reward Accounting

Aggregate complexity score:
    mean(iteration × complexity) / (max_iterations × base_complexity) × 100,
    clamped to [0, 100]

Reward balance:
    0.01 × node_count + 0.05 × storage_points + 0.1 × complexity_score,
    rounded half-up to two decimals
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from fss.config import PlacementConfig, RewardConfig
from fss.constants import COMPLEXITY_SCORE_MAX, REWARD_DECIMALS
from fss.core.types import StorageNode

logger = logging.getLogger(__name__)


def compute_complexity_score(
    nodes: Iterable[StorageNode],
    max_iterations: int,
    base_complexity: int
) -> float:
    """
    Compute the address-space complexity percentage.

    Root nodes are skipped. With no stored nodes the score is 0.

    Args:
        nodes: Tree nodes
        max_iterations: Placement iteration bound
        base_complexity: Complexity unit

    Returns:
        Score in [0.0, 100.0]
    """
    total = 0
    count = 0
    for node in nodes:
        if node.is_root:
            continue
        total += node.iteration * node.complexity
        count += 1

    if count == 0:
        return 0.0

    score = (total / count) / (max_iterations * base_complexity) * 100
    return max(0.0, min(COMPLEXITY_SCORE_MAX, score))


def round_reward(value: float) -> float:
    """Round half-up to REWARD_DECIMALS places."""
    quantum = Decimal(1).scaleb(-REWARD_DECIMALS)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_reward_balance(
    node_count: int,
    storage_points: int,
    complexity_score: float,
    config: Optional[RewardConfig] = None
) -> float:
    """
    Compute the reward balance from tree aggregates.

    Args:
        node_count: Nodes in the tree, root included
        storage_points: Sum of stored complexity
        complexity_score: Aggregate complexity percentage

    Returns:
        Balance rounded to two decimals
    """
    if config is None:
        config = RewardConfig()

    reward = (
        config.node_weight * node_count
        + config.points_weight * storage_points
        + config.complexity_weight * complexity_score
    )
    return round_reward(reward)


@dataclass
class RewardAccountant:
    """
    Tracks storage points and derives rewards from the current nodes.

    storage_points is a running total updated on every store; the
    complexity score and balance are recomputed on each call.
    """
    reward: RewardConfig = field(default_factory=RewardConfig)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    storage_points: int = 0

    def record(self, complexity: int) -> int:
        """Add a stored node's complexity and return the new total."""
        if complexity < 0:
            raise ValueError(f"complexity must be non-negative, got {complexity}")
        self.storage_points += complexity
        return self.storage_points

    def complexity_score(self, nodes: Iterable[StorageNode]) -> float:
        return compute_complexity_score(
            nodes,
            self.placement.max_iterations,
            self.reward.base_complexity,
        )

    def balance(self, nodes: Iterable[StorageNode]) -> float:
        """
        Recompute the reward balance for the given nodes.

        The node term counts every node, root included. The complexity
        score still skips the root.
        """
        nodes = list(nodes)
        return compute_reward_balance(
            len(nodes),
            self.storage_points,
            self.complexity_score(nodes),
            self.reward,
        )


def get_reward_info(config: Optional[RewardConfig] = None) -> dict:
    """Get information about reward calculation."""
    if config is None:
        config = RewardConfig()
    return {
        "formula": (
            f"{config.node_weight} × nodes + {config.points_weight} × storage_points"
            f" + {config.complexity_weight} × complexity_score"
        ),
        "base_complexity": config.base_complexity,
        "size_divisor": config.size_divisor,
        "jitter_range": config.jitter_range,
        "decimals": REWARD_DECIMALS,
    }
