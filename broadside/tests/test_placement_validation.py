"""
Tests for ship placement validation.

Tests:
- Valid layouts pass through unchanged
- Schema violations are accumulated
- Ships past the board edge, overlapping ships
"""

import copy

import pytest

from ..board import PlacementPayload, ShipType, ValidatedPlacement, validate_placement
from ..board.validation import generate_empty_grid, populate_grid
from ..errors import (
    OccupancyMismatchError,
    OutOfBoundsError,
    OverlapError,
    PlacementError,
    SchemaError,
)
from .conftest import make_payload


class TestValidPlacement:
    """Tests for layouts that should be accepted."""

    def test_returns_payload_unchanged(self, valid_payload, grid_size):
        """A valid payload comes back with the same values."""
        original = copy.deepcopy(valid_payload)

        placement = validate_placement(valid_payload, grid_size=grid_size)

        assert placement.to_payload() == original
        assert valid_payload == original

    def test_is_idempotent(self, valid_payload, grid_size):
        """Validating twice gives equal results."""
        first = validate_placement(valid_payload, grid_size=grid_size)
        second = validate_placement(valid_payload, grid_size=grid_size)

        assert first == second

    def test_result_is_validated_type(self, valid_payload, grid_size):
        """Only validate_placement produces a ValidatedPlacement."""
        placement = validate_placement(valid_payload, grid_size=grid_size)
        parsed = PlacementPayload.model_validate(valid_payload)

        assert isinstance(placement, ValidatedPlacement)
        assert not isinstance(parsed, ValidatedPlacement)
        assert placement.ships() == parsed.ships()

    def test_ships_keyed_by_type(self, valid_payload, grid_size):
        """Validated placement exposes ships by type."""
        placement = validate_placement(valid_payload, grid_size=grid_size)
        ships = placement.ships()

        assert set(ships) == set(ShipType)
        assert ships[ShipType.BATTLESHIP].origin == (0, 0)

    def test_ship_touching_far_edge(self, grid_size):
        """A ship ending exactly on the last column is fine."""
        payload = make_payload(
            ((1, 0), "horizontal"),  # columns 1-4
            ((0, 2), "vertical"),  # rows 2-4
            ((3, 4), "horizontal"),  # columns 3-4
        )
        validate_placement(payload, grid_size=grid_size)

    def test_larger_board(self):
        """Origins valid only on a larger board are accepted there."""
        payload = make_payload(
            ((6, 9), "horizontal"),
            ((9, 0), "vertical"),
            ((0, 0), "vertical"),
        )
        validate_placement(payload, grid_size=10)


class TestSchemaErrors:
    """Tests for structural rejections."""

    def test_missing_ship(self, valid_payload, grid_size):
        """A missing ship type is reported by name."""
        del valid_payload["Submarine"]

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert "Submarine" in exc_info.value.paths

    def test_unknown_ship(self, valid_payload, grid_size):
        """An extra key is reported by name."""
        valid_payload["Carrier"] = {"origin": [0, 4], "orientation": "horizontal"}

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert "Carrier" in exc_info.value.paths

    def test_lowercase_key_is_unknown(self, valid_payload, grid_size):
        """Ship keys are case-sensitive."""
        valid_payload["battleship"] = valid_payload.pop("Battleship")

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert "battleship" in exc_info.value.paths
        assert "Battleship" in exc_info.value.paths

    def test_accumulates_every_violation(self, valid_payload, grid_size):
        """All problems are listed, not just the first."""
        valid_payload["Battleship"]["orientation"] = "diagonal"
        valid_payload["Destroyer"]["origin"] = [9, 0]
        del valid_payload["Submarine"]

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        paths = exc_info.value.paths
        assert "Battleship.orientation" in paths
        assert "Destroyer.origin" in paths
        assert "Submarine" in paths
        assert len(exc_info.value.violations) == 3

    def test_negative_origin(self, valid_payload, grid_size):
        """Negative coordinates are rejected by the schema."""
        valid_payload["Battleship"]["origin"] = [-1, 0]

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert "Battleship.origin.0" in exc_info.value.paths

    @pytest.mark.parametrize("origin", [[1], [1, 2, 3], "1,2", [1.5, 0], ["1", 0], [True, 0]])
    def test_malformed_origin(self, valid_payload, grid_size, origin):
        """Origins must be exactly two integers."""
        valid_payload["Destroyer"]["origin"] = origin

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert all(p.startswith("Destroyer.origin") for p in exc_info.value.paths)

    def test_missing_orientation(self, valid_payload, grid_size):
        """Orientation is required."""
        del valid_payload["Submarine"]["orientation"]

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert exc_info.value.paths == ["Submarine.orientation"]
        assert exc_info.value.violations[0].code == "missing"

    @pytest.mark.parametrize("payload", [None, [], "ships", 42])
    def test_not_a_mapping(self, payload, grid_size):
        """Non-object payloads are schema errors."""
        with pytest.raises(SchemaError):
            validate_placement(payload, grid_size=grid_size)

    def test_error_serialises_violations(self, valid_payload, grid_size):
        """SchemaError.to_dict carries every violation."""
        del valid_payload["Submarine"]

        with pytest.raises(SchemaError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        data = exc_info.value.to_dict()
        assert data["kind"] == "schema"
        assert data["violations"][0]["path"] == "Submarine"


class TestGeometryErrors:
    """Tests for ships that fall off the board or collide."""

    def test_far_end_off_board(self):
        """Origin on the board is not enough; the whole ship must fit."""
        payload = make_payload(
            ((8, 0), "horizontal"),  # columns 8-11 on a 10x10 board
            ((0, 2), "vertical"),
            ((4, 4), "horizontal"),
        )

        with pytest.raises(OutOfBoundsError) as exc_info:
            validate_placement(payload, grid_size=10)

        assert exc_info.value.ship == ShipType.BATTLESHIP
        assert exc_info.value.cell == (10, 0)
        assert exc_info.value.kind == "out_of_bounds"

    def test_vertical_ship_off_bottom(self, valid_payload, grid_size):
        """Vertical ships are checked against the last row."""
        valid_payload["Destroyer"]["origin"] = [2, 3]
        valid_payload["Destroyer"]["orientation"] = "vertical"

        with pytest.raises(OutOfBoundsError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert exc_info.value.ship == ShipType.DESTROYER
        assert exc_info.value.cell == (2, 5)

    def test_overlap(self, valid_payload, grid_size):
        """Two ships on one cell are rejected with that cell."""
        valid_payload["Submarine"]["origin"] = [2, 0]
        valid_payload["Submarine"]["orientation"] = "vertical"

        with pytest.raises(OverlapError) as exc_info:
            validate_placement(valid_payload, grid_size=grid_size)

        assert exc_info.value.cell == (2, 0)
        assert "[2, 0]" in str(exc_info.value)

    def test_geometry_errors_are_placement_errors(self, valid_payload, grid_size):
        """Callers can catch every rejection through PlacementError."""
        valid_payload["Submarine"]["origin"] = [0, 0]

        with pytest.raises(PlacementError):
            validate_placement(valid_payload, grid_size=grid_size)

    def test_occupancy_mismatch_message(self):
        """Mismatch reports both counts."""
        error = OccupancyMismatchError(8, 9)

        assert error.to_dict() == {
            "kind": "occupancy_mismatch",
            "message": "8 grid positions were occupied, but 9 was the expected value",
            "occupied": 8,
            "expected": 9,
        }


class TestOccupancyGrid:
    """Tests for the scratch grid helpers."""

    def test_fresh_grid_per_call(self, grid_size):
        """Each grid is independent."""
        first = generate_empty_grid(grid_size)
        first[0][0] = 5

        assert generate_empty_grid(grid_size)[0][0] == 0
        assert len(first) == grid_size
        assert all(len(row) == grid_size for row in first)

    def test_populate_reports_cells_outside(self, valid_payload, grid_size):
        """Cells off the grid are returned, not written."""
        ship = PlacementPayload.model_validate(valid_payload).battleship
        grid = generate_empty_grid(3)

        outside = populate_grid(grid, ship, 4)

        assert outside == [(3, 0)]
        assert grid[0] == [1, 1, 1]
