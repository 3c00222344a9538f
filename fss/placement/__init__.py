"""
FSS Engine Placement

Deterministic escape-time placement of records in the address space.
"""

from fss.placement.escape_time import (
    Placement,
    hash_to_coordinate,
    escape_time,
    place,
    get_placement_info,
)

__all__ = [
    "Placement",
    "hash_to_coordinate",
    "escape_time",
    "place",
    "get_placement_info",
]
