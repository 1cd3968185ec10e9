"""
Match Instance - Pairing of two participants in one game.

STATE MACHINE (one-directional):
    EMPTY     no participants
    JOINABLE  player A present, slot B open
    READY     both present, ``ready`` is True

Nothing here removes a participant. Leaving and forfeits are handled by
the host.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import uuid

from ..errors import AlreadyJoinedError, MatchFullError, NotAParticipantError


class MatchStatus(str, Enum):
    """Pairing status of a match."""
    EMPTY = "empty"
    JOINABLE = "joinable"
    READY = "ready"


@dataclass
class MatchInstance:
    """
    A match between two participants.

    Participant IDs are opaque strings supplied by the host.
    """
    match_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    player_a: str | None = None
    player_b: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchInstance:
        # "ready" is derived from the slots; a stored flag is not trusted
        return cls(
            match_id=data["uuid"],
            player_a=data.get("playerA"),
            player_b=data.get("playerB"),
        )

    @property
    def ready(self) -> bool:
        """True iff both slots are filled."""
        return self.player_a is not None and self.player_b is not None

    @property
    def status(self) -> MatchStatus:
        if self.player_a is None:
            return MatchStatus.EMPTY
        if self.player_b is None:
            return MatchStatus.JOINABLE
        return MatchStatus.READY

    def add_participant(self, participant_id: str) -> None:
        """
        Put a participant into the open slot.

        Raises:
            MatchFullError: both slots are taken
            AlreadyJoinedError: the participant already holds slot A
        """
        if not self.is_joinable():
            raise MatchFullError(f"match {self.match_id} already has two players")
        if participant_id == self.player_a:
            raise AlreadyJoinedError(
                f"player {participant_id} already joined match {self.match_id}"
            )

        if self.player_a is None:
            self.player_a = participant_id
        else:
            self.player_b = participant_id

    def is_joinable(self) -> bool:
        return self.player_b is None

    def has_participant(self, participant_id: str) -> bool:
        return participant_id is not None and participant_id in (self.player_a, self.player_b)

    def get_participants(self) -> tuple[str | None, str | None]:
        return self.player_a, self.player_b

    def opponent_of(self, participant_id: str) -> str | None:
        """
        ID of the other participant, or None while slot B is open.

        Raises NotAParticipantError if the participant is in neither slot.
        """
        if participant_id is not None and participant_id == self.player_a:
            return self.player_b
        if participant_id is not None and participant_id == self.player_b:
            return self.player_a
        raise NotAParticipantError(participant_id, self.match_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.match_id,
            "ready": self.ready,
            "playerA": self.player_a,
            "playerB": self.player_b,
        }
