"""
Errors - Structured failures raised by the engine.

Two families:
- PlacementError: a participant submitted a bad ship layout. Recoverable;
  reported back to that participant, match state is untouched.
- MatchError: a request does not fit the match it targets. The integrity
  variants (NotAParticipantError) indicate a routing bug in the host.

Every error carries a stable ``kind`` so callers branch on type, not text.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .board.ships import ShipType, CellPosition


class BroadsideError(Exception):
    """Base class for all engine errors."""

    kind = "error"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


# =============================================================================
# Placement errors
# =============================================================================

@dataclass(frozen=True)
class Violation:
    """A single schema violation found in a placement payload."""
    path: str  # Dotted location, e.g. "Battleship.origin.0"
    code: str  # Machine-readable, e.g. "missing", "extra_forbidden"
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class PlacementError(BroadsideError):
    """Raised when a ship placement is rejected."""

    kind = "placement"


class SchemaError(PlacementError):
    """Payload is structurally invalid. Carries every violation found."""

    kind = "schema"

    def __init__(self, violations: list[Violation]):
        self.violations = violations
        super().__init__(
            f"placement failed schema validation with {len(violations)} error(s)"
        )

    @property
    def paths(self) -> list[str]:
        return [v.path for v in self.violations]

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["violations"] = [v.to_dict() for v in self.violations]
        return data


class OutOfBoundsError(PlacementError):
    """A ship extends past the edge of the board."""

    kind = "out_of_bounds"

    def __init__(self, ship: ShipType, cell: CellPosition):
        self.ship = ship
        self.cell = cell
        super().__init__(
            f"{ship.value} is over the edge of the board at [{cell[0]}, {cell[1]}]"
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["ship"] = self.ship.value
        data["cell"] = list(self.cell)
        return data


class OverlapError(PlacementError):
    """Two ships occupy the same cell."""

    kind = "overlap"

    def __init__(self, cell: CellPosition):
        self.cell = cell
        super().__init__(f"ships are overlapping at grid [{cell[0]}, {cell[1]}]")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["cell"] = list(self.cell)
        return data


class OccupancyMismatchError(PlacementError):
    """Occupied cell count differs from the total length of the fleet."""

    kind = "occupancy_mismatch"

    def __init__(self, occupied: int, expected: int):
        self.occupied = occupied
        self.expected = expected
        super().__init__(
            f"{occupied} grid positions were occupied, but {expected} was the expected value"
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["occupied"] = self.occupied
        data["expected"] = self.expected
        return data


# =============================================================================
# Match errors
# =============================================================================

class MatchError(BroadsideError):
    """Raised when an operation does not fit the state of a match."""

    kind = "match"


class NotAParticipantError(MatchError):
    """A participant acted on a match it never joined."""

    kind = "not_a_participant"

    def __init__(self, participant_id: str, match_id: str):
        self.participant_id = participant_id
        self.match_id = match_id
        super().__init__(
            f"tried to find opponent for player {participant_id} in match {match_id}, "
            "but this player is not associated with this match"
        )


class MatchFullError(MatchError):
    """Both participant slots are already taken."""

    kind = "match_full"


class AlreadyJoinedError(MatchError):
    """The participant already holds a slot in this match."""

    kind = "already_joined"


class MatchNotFoundError(MatchError):
    """No match with the given ID exists."""

    kind = "match_not_found"


class MatchNotReadyError(MatchError):
    """Shots are not allowed until both fleets are placed."""

    kind = "match_not_ready"


class PlacementLockedError(MatchError):
    """The participant already has an accepted placement."""

    kind = "placement_locked"


class MatchOverError(MatchError):
    """The match has a winner; no further shots are accepted."""

    kind = "match_over"
