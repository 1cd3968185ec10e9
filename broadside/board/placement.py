"""
Placement Schema - Pydantic models for ship placement payloads.

The payload sent by a client looks like:

    {
        "Battleship": {"origin": [0, 0], "orientation": "horizontal"},
        "Destroyer": {"origin": [0, 1], "orientation": "vertical"},
        "Submarine": {"origin": [3, 3], "orientation": "horizontal"}
    }

Bounds on the origin depend on the board dimension, which is passed in
through the validation context (``{"grid_size": N}``).
"""

from __future__ import annotations
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .ships import CellPosition, Orientation, ShipType


Coordinate = Annotated[int, Field(strict=True, ge=0)]


class ShipPlacement(BaseModel):
    """Origin and orientation of one ship."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    origin: tuple[Coordinate, Coordinate] = Field(
        ..., description="[column, row] of the ship's first cell"
    )
    orientation: Orientation

    @field_validator("origin")
    @classmethod
    def origin_on_board(cls, origin: CellPosition, info: ValidationInfo) -> CellPosition:
        grid_size = (info.context or {}).get("grid_size")
        if grid_size is None:
            return origin
        for axis, value in zip(("column", "row"), origin):
            if value > grid_size - 1:
                raise ValueError(
                    f"origin {axis} {value} must be within [0, {grid_size - 1}]"
                )
        return origin


class PlacementPayload(BaseModel):
    """
    A complete fleet layout: one ShipPlacement per ShipType.

    Unknown keys are rejected. A model that passed validate_placement() is a
    ValidatedPlacement and is trusted downstream.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    battleship: ShipPlacement = Field(..., alias=ShipType.BATTLESHIP.value)
    destroyer: ShipPlacement = Field(..., alias=ShipType.DESTROYER.value)
    submarine: ShipPlacement = Field(..., alias=ShipType.SUBMARINE.value)

    def ships(self) -> dict[ShipType, ShipPlacement]:
        """Placements keyed by ship type."""
        return {
            ShipType.BATTLESHIP: self.battleship,
            ShipType.DESTROYER: self.destroyer,
            ShipType.SUBMARINE: self.submarine,
        }

    def to_payload(self) -> dict:
        """The wire form, identical to what the client submitted."""
        return self.model_dump(mode="json", by_alias=True)


class ValidatedPlacement(PlacementPayload):
    """
    A PlacementPayload that passed every placement check.

    Only validate_placement() produces these; build_hit_record and the match
    manager accept nothing else.
    """
