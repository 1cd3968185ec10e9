"""
Ships - Fleet definition and ship geometry.

Every participant places exactly one ship of each type. A ship occupies a
straight run of cells starting at its origin and extending toward higher
column (horizontal) or higher row (vertical) indices.
"""

from __future__ import annotations
from enum import Enum


CellPosition = tuple[int, int]  # (column, row)


class ShipType(str, Enum):
    """Ship classes in a fleet. Values are the wire keys of a placement."""
    BATTLESHIP = "Battleship"
    DESTROYER = "Destroyer"
    SUBMARINE = "Submarine"


class Orientation(str, Enum):
    """Direction a ship extends from its origin."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.BATTLESHIP: 4,
    ShipType.DESTROYER: 3,
    ShipType.SUBMARINE: 2,
}

EXPECTED_OCCUPIED_CELLS: int = sum(SHIP_LENGTHS.values())


def ship_cells(
    origin: CellPosition, orientation: Orientation, length: int
) -> list[CellPosition]:
    """
    Cells covered by a ship, origin first.

    No bounds checking happens here; callers decide what an off-board
    cell means.
    """
    col, row = origin
    if orientation == Orientation.HORIZONTAL:
        return [(col + i, row) for i in range(length)]
    return [(col, row + i) for i in range(length)]
