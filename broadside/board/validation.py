"""
Placement Validation - Decides whether a fleet layout is legal.

Validates that:
1. The payload has exactly one well-formed entry per ship type
2. Every ship lies fully on the board
3. No two ships share a cell
4. The fleet occupies exactly the expected number of cells

Step 1 accumulates every schema violation before failing. Steps 2-4 run
over an occupancy grid that is rebuilt for each call and thrown away.
"""

from __future__ import annotations
from typing import Any

from pydantic import ValidationError

from .. import config
from ..errors import (
    OccupancyMismatchError,
    OutOfBoundsError,
    OverlapError,
    SchemaError,
    Violation,
)
from .placement import PlacementPayload, ShipPlacement, ValidatedPlacement
from .ships import (
    EXPECTED_OCCUPIED_CELLS,
    SHIP_LENGTHS,
    CellPosition,
    ShipType,
    ship_cells,
)

Grid = list[list[int]]


def validate_placement(payload: Any, grid_size: int | None = None) -> ValidatedPlacement:
    """
    Validate a ship placement payload.

    Args:
        payload: Untrusted placement data, usually decoded JSON
        grid_size: Board dimension N (defaults to the configured size)

    Returns:
        The payload as a ValidatedPlacement. Values are not changed.

    Raises:
        SchemaError: payload is structurally invalid (lists every violation)
        OutOfBoundsError: a ship extends past the board edge
        OverlapError: two ships share a cell
        OccupancyMismatchError: occupied cells differ from the fleet total
    """
    if grid_size is None:
        grid_size = config.GRID_SIZE

    placement = _validate_schema(payload, grid_size)

    grid = generate_empty_grid(grid_size)
    overflow: list[tuple[ShipType, CellPosition]] = []
    for ship_type, ship in placement.ships().items():
        overflow.extend(
            (ship_type, cell)
            for cell in populate_grid(grid, ship, SHIP_LENGTHS[ship_type])
        )

    _check_grid(grid, overflow)
    return ValidatedPlacement.model_construct(
        battleship=placement.battleship,
        destroyer=placement.destroyer,
        submarine=placement.submarine,
    )


def _validate_schema(payload: Any, grid_size: int) -> PlacementPayload:
    """Run the pydantic schema, collecting every violation."""
    try:
        return PlacementPayload.model_validate(
            payload, context={"grid_size": grid_size}
        )
    except ValidationError as e:
        violations = [
            Violation(
                path=".".join(str(part) for part in err["loc"]) or "payload",
                code=err["type"],
                message=err["msg"],
            )
            for err in e.errors()
        ]
        raise SchemaError(violations) from e


def generate_empty_grid(grid_size: int) -> Grid:
    """An N x N grid filled with zeroes."""
    return [[0] * grid_size for _ in range(grid_size)]


def populate_grid(grid: Grid, ship: ShipPlacement, length: int) -> list[CellPosition]:
    """
    Increment every grid cell the ship covers.

    Returns the cells that fell outside the grid. They are not written.
    """
    outside = []
    for col, row in ship_cells(ship.origin, ship.orientation, length):
        if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
            grid[row][col] += 1
        else:
            outside.append((col, row))
    return outside


def _check_grid(
    grid: Grid,
    overflow: list[tuple[ShipType, CellPosition]],
) -> None:
    if overflow:
        ship_type, cell = overflow[0]
        raise OutOfBoundsError(ship_type, cell)

    occupied = 0
    for row_index, row in enumerate(grid):
        for col_index, value in enumerate(row):
            if value > 1:
                raise OverlapError((col_index, row_index))
            if value != 0:
                occupied += 1

    if occupied != EXPECTED_OCCUPIED_CELLS:
        raise OccupancyMismatchError(occupied, EXPECTED_OCCUPIED_CELLS)

