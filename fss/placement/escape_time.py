"""
FSS Engine Placement Function

Maps a record digest to a point c in the plane and counts how many
iterations of z <- z^2 + c (from z = 0) it takes |z| to exceed the
escape radius.

Points near the boundary of the Mandelbrot set need many iterations
and score as "more complex" placements. This is a deterministic
scoring heuristic, not a proof of work.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from fss.config import PlacementConfig
from fss.constants import (
    X_MIN,
    X_MAX,
    Y_MIN,
    Y_MAX,
    COORDINATE_HEX_DIGITS,
    COORDINATE_SCALE,
)
from fss.core.types import Coordinate
from fss.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Placement:
    """Coordinate and escape-time count for one record."""
    coordinate: Coordinate
    iteration: int


def hash_to_coordinate(digest_hex: str) -> Coordinate:
    """
    Map a hex digest into the placement plane.

    The first 8 hex digits give x in [-2, 1], the next 8 give y in
    [-1, 1], each scaled linearly from [0, 0xFFFFFFFF].

    Args:
        digest_hex: Hex digest of the serialized record

    Returns:
        Coordinate within the bounded address space
    """
    if len(digest_hex) < 2 * COORDINATE_HEX_DIGITS:
        raise InvalidArgumentError(
            "digest_hex",
            f"need at least {2 * COORDINATE_HEX_DIGITS} hex digits, got {len(digest_hex)}"
        )

    try:
        x_part = int(digest_hex[:COORDINATE_HEX_DIGITS], 16)
        y_part = int(digest_hex[COORDINATE_HEX_DIGITS:2 * COORDINATE_HEX_DIGITS], 16)
    except ValueError:
        raise InvalidArgumentError("digest_hex", "not a hex string") from None

    x = X_MIN + (x_part / COORDINATE_SCALE) * (X_MAX - X_MIN)
    y = Y_MIN + (y_part / COORDINATE_SCALE) * (Y_MAX - Y_MIN)

    return Coordinate(x, y)


def escape_time(
    c: Coordinate,
    max_iterations: int,
    escape_radius: float
) -> int:
    """
    Count iterations before the orbit of c escapes.

    Iterates z <- z^2 + c from z = 0 while |z| <= escape_radius and
    fewer than max_iterations steps have run.

    Args:
        c: Point being tested
        max_iterations: Upper bound on the count
        escape_radius: Divergence threshold

    Returns:
        Iteration count in [0, max_iterations]
    """
    zx = 0.0
    zy = 0.0
    radius_sq = escape_radius * escape_radius
    iteration = 0

    while zx * zx + zy * zy <= radius_sq and iteration < max_iterations:
        zx, zy = zx * zx - zy * zy + c.x, 2 * zx * zy + c.y
        iteration += 1

    return iteration


def place(digest_hex: str, config: Optional[PlacementConfig] = None) -> Placement:
    """
    Compute the placement of a record from its digest.

    Args:
        digest_hex: Hex digest of the serialized record
        config: Iteration bound and escape radius

    Returns:
        Placement with coordinate and iteration count
    """
    if config is None:
        config = PlacementConfig()

    coordinate = hash_to_coordinate(digest_hex)
    iteration = escape_time(coordinate, config.max_iterations, config.escape_radius)

    logger.debug(
        f"Placed {digest_hex[:16]} at ({coordinate.x:.6f}, {coordinate.y:.6f}), "
        f"iteration={iteration}"
    )
    return Placement(coordinate=coordinate, iteration=iteration)


def get_placement_info(config: Optional[PlacementConfig] = None) -> dict:
    """Get information about the placement function."""
    if config is None:
        config = PlacementConfig()
    return {
        "formula": "z <- z^2 + c, z0 = 0",
        "max_iterations": config.max_iterations,
        "escape_radius": config.escape_radius,
        "x_range": [X_MIN, X_MAX],
        "y_range": [Y_MIN, Y_MAX],
        "digest_bits_per_axis": COORDINATE_HEX_DIGITS * 4,
    }
