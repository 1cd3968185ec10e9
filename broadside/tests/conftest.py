"""
Pytest fixtures for Broadside tests.
"""

import pytest

from ..board import build_hit_record, validate_placement
from ..events import EventNotifier
from ..match import MatchManager

GRID_SIZE = 5


class RecordingNotifier(EventNotifier):
    """Notifier that keeps events in memory instead of posting them."""

    def __init__(self):
        super().__init__(broker_url=None)
        self.events = []

    def send(self, event_type, data):
        self.events.append((event_type, data))

    @property
    def types(self):
        return [event_type.value for event_type, _ in self.events]


def make_payload(battleship, destroyer, submarine):
    """Build a placement payload from (origin, orientation) pairs."""
    return {
        "Battleship": {"origin": list(battleship[0]), "orientation": battleship[1]},
        "Destroyer": {"origin": list(destroyer[0]), "orientation": destroyer[1]},
        "Submarine": {"origin": list(submarine[0]), "orientation": submarine[1]},
    }


@pytest.fixture
def grid_size() -> int:
    return GRID_SIZE


@pytest.fixture
def valid_payload() -> dict:
    """
    A legal 5x5 layout:

        B B B B .
        D . . . .
        D . . . .
        D . . S S
        . . . . .
    """
    return make_payload(
        ((0, 0), "horizontal"),
        ((0, 1), "vertical"),
        ((3, 3), "horizontal"),
    )


@pytest.fixture
def other_payload() -> dict:
    """A second legal 5x5 layout along the right and bottom edges."""
    return make_payload(
        ((4, 0), "vertical"),
        ((0, 4), "horizontal"),
        ((1, 0), "horizontal"),
    )


@pytest.fixture
def hit_record(valid_payload):
    """Undamaged hit record for valid_payload."""
    return build_hit_record(validate_placement(valid_payload, grid_size=GRID_SIZE))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def manager(notifier) -> MatchManager:
    return MatchManager(notifier=notifier, grid_size=GRID_SIZE)


@pytest.fixture
def ready_match(manager, valid_payload, other_payload):
    """A match where alice and bob have both placed ships."""
    match = manager.join("alice")
    manager.join("bob")
    manager.submit_placement(match.match_id, "alice", valid_payload)
    manager.submit_placement(match.match_id, "bob", other_payload)
    return match
