"""
Hit Record - Live per-cell damage tracking for one participant's fleet.

Built once from a validated placement, then mutated shot by shot by the
gameplay loop. The outcome evaluator only ever reads it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .placement import ValidatedPlacement
from .ships import SHIP_LENGTHS, CellPosition, Orientation, ShipType, ship_cells


class ShotKind(str, Enum):
    """What a shot did to the targeted fleet."""
    MISS = "miss"
    HIT = "hit"
    SINK = "sink"  # Hit that completed a ship
    REPEAT = "repeat"  # Cell was already targeted


@dataclass
class CellState:
    """One cell of a ship."""
    position: CellPosition
    hit: bool = False


@dataclass
class ShipState:
    """A placed ship and the damage it has taken."""
    ship_type: ShipType
    origin: CellPosition
    orientation: Orientation
    cells: list[CellState] = field(default_factory=list)

    @property
    def is_sunk(self) -> bool:
        return bool(self.cells) and all(c.hit for c in self.cells)

    def cell_at(self, position: CellPosition) -> CellState | None:
        for cell in self.cells:
            if cell.position == position:
                return cell
        return None


@dataclass
class HitRecord:
    """Every ship of one participant, plus the cells the opponent has fired at."""
    ships: dict[ShipType, ShipState] = field(default_factory=dict)
    targeted: set[CellPosition] = field(default_factory=set)

    def all_cells(self) -> list[CellState]:
        return [cell for ship in self.ships.values() for cell in ship.cells]

    def sunk_ships(self) -> list[ShipType]:
        return [t for t, ship in self.ships.items() if ship.is_sunk]

    def ship_at(self, position: CellPosition) -> ShipState | None:
        for ship in self.ships.values():
            if ship.cell_at(position) is not None:
                return ship
        return None

    def to_dict(self) -> dict:
        """JSON-ready view keyed by ship type wire name."""
        return {
            ship_type.value: {
                "origin": list(ship.origin),
                "orientation": ship.orientation.value,
                "cells": [
                    {"origin": list(c.position), "hit": c.hit} for c in ship.cells
                ],
            }
            for ship_type, ship in self.ships.items()
        }


@dataclass(frozen=True)
class ShotResult:
    """Outcome of a single shot against a hit record."""
    kind: ShotKind
    position: CellPosition
    ship_type: ShipType | None = None  # Set for HIT and SINK


def build_hit_record(placement: ValidatedPlacement) -> HitRecord:
    """Lay a validated placement out as undamaged cells."""
    ships = {}
    for ship_type, ship in placement.ships().items():
        cells = ship_cells(ship.origin, ship.orientation, SHIP_LENGTHS[ship_type])
        ships[ship_type] = ShipState(
            ship_type=ship_type,
            origin=ship.origin,
            orientation=ship.orientation,
            cells=[CellState(position=c) for c in cells],
        )
    return HitRecord(ships=ships)


def record_shot(hit_record: HitRecord, position: CellPosition) -> ShotResult:
    """
    Apply a shot at ``position`` to the hit record.

    Bounds are the caller's concern. A repeated shot changes nothing.
    """
    position = (position[0], position[1])
    if position in hit_record.targeted:
        return ShotResult(kind=ShotKind.REPEAT, position=position)
    hit_record.targeted.add(position)

    ship = hit_record.ship_at(position)
    if ship is None:
        return ShotResult(kind=ShotKind.MISS, position=position)

    ship.cell_at(position).hit = True
    kind = ShotKind.SINK if ship.is_sunk else ShotKind.HIT
    return ShotResult(kind=kind, position=position, ship_type=ship.ship_type)
