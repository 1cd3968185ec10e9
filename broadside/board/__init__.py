"""
Board - Fleet layout, placement validation and damage tracking.

Pure functions over in-memory data:
- validate_placement: untrusted payload -> ValidatedPlacement (or PlacementError)
- build_hit_record / record_shot: damage tracking during play
- has_lost: loss detection
"""

from .ships import (
    ShipType,
    Orientation,
    CellPosition,
    SHIP_LENGTHS,
    EXPECTED_OCCUPIED_CELLS,
    ship_cells,
)
from .placement import ShipPlacement, PlacementPayload, ValidatedPlacement
from .validation import validate_placement
from .hits import (
    HitRecord,
    ShipState,
    CellState,
    ShotKind,
    ShotResult,
    build_hit_record,
    record_shot,
)
from .outcome import has_lost

__all__ = [
    "ShipType",
    "Orientation",
    "CellPosition",
    "SHIP_LENGTHS",
    "EXPECTED_OCCUPIED_CELLS",
    "ship_cells",
    "ShipPlacement",
    "PlacementPayload",
    "ValidatedPlacement",
    "validate_placement",
    "HitRecord",
    "ShipState",
    "CellState",
    "ShotKind",
    "ShotResult",
    "build_hit_record",
    "record_shot",
    "has_lost",
]
