"""
Match Manager - Hosts matches in memory and drives the gameplay loop.

LIFECYCLE:
1. Participant joins -> paired into an open match, or a new one is created
2. Each participant submits a placement -> validated once, then frozen
3. Participants fire at each other -> shot routed to the opponent's fleet
4. After every shot the target is checked for loss -> match ends with a winner

PERSISTENCE RULES:
- No database; matches live only as long as the process
- Ending a match drops every fleet and hit record it held

Mutations are serialised by one lock per manager. The board and match
modules underneath provide no locking of their own.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging
import threading
import time

from ..board import (
    CellPosition,
    HitRecord,
    ShotKind,
    ShotResult,
    ValidatedPlacement,
    build_hit_record,
    has_lost,
    record_shot,
    validate_placement,
)
from ..errors import (
    MatchNotFoundError,
    MatchNotReadyError,
    MatchOverError,
    NotAParticipantError,
    PlacementError,
    PlacementLockedError,
)
from ..events import EventNotifier
from .instance import MatchInstance

logger = logging.getLogger(__name__)


@dataclass
class Fleet:
    """A participant's frozen layout and the damage it has taken."""
    placement: ValidatedPlacement
    hit_record: HitRecord


@dataclass
class MatchRecord:
    """
    Everything the host keeps about one match.

    The MatchInstance handles pairing; this adds fleets and the result.
    """
    instance: MatchInstance
    created_at: float
    fleets: dict[str, Fleet] = field(default_factory=dict)
    winner: str | None = None
    shots_fired: int = 0

    @property
    def match_id(self) -> str:
        return self.instance.match_id

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def hit_record_for(self, participant_id: str) -> HitRecord | None:
        fleet = self.fleets.get(participant_id)
        return fleet.hit_record if fleet else None


@dataclass(frozen=True)
class ShotOutcome:
    """Result of a shot, from the shooter's point of view."""
    match_id: str
    shooter: str
    target: str
    result: ShotResult
    target_lost: bool

    @property
    def winner(self) -> str | None:
        return self.shooter if self.target_lost else None


class MatchManager:
    """
    Manages matches for the lifetime of the process.

    Usage:
        manager = MatchManager(notifier=notifier)

        match = manager.join("alice")
        manager.join("bob")

        manager.submit_placement(match.match_id, "alice", alice_payload)
        manager.submit_placement(match.match_id, "bob", bob_payload)

        outcome = manager.fire(match.match_id, "alice", (0, 0))
    """

    def __init__(self, notifier: EventNotifier | None = None, grid_size: int | None = None):
        self._matches: dict[str, MatchRecord] = {}
        self._lock = threading.RLock()
        self.notifier = notifier or EventNotifier()
        self.grid_size = grid_size

    # =========================================================================
    # Pairing
    # =========================================================================

    def join(self, participant_id: str) -> MatchInstance:
        """
        Pair a participant into the oldest joinable match, or open a new one.

        A participant already waiting in a match gets that match back.
        """
        with self._lock:
            for record in self._matches.values():
                if record.is_over or not record.instance.is_joinable():
                    continue
                if record.instance.player_a == participant_id:
                    return record.instance
                record.instance.add_participant(participant_id)
                logger.info(
                    "player joined match",
                    extra={"match_id": record.match_id, "player": participant_id},
                )
                return record.instance

            instance = MatchInstance()
            instance.add_participant(participant_id)
            self._matches[instance.match_id] = MatchRecord(
                instance=instance, created_at=time.time()
            )
            logger.info(
                "created match",
                extra={"match_id": instance.match_id, "player": participant_id},
            )
            return instance

    def get_match(self, match_id: str) -> MatchRecord:
        """Raises MatchNotFoundError for unknown IDs."""
        record = self._matches.get(match_id)
        if record is None:
            raise MatchNotFoundError(f"match {match_id} not found")
        return record

    def list_matches(self) -> list[str]:
        return list(self._matches)

    def end_match(self, match_id: str) -> bool:
        """Drop a match and all state it holds. Returns False if unknown."""
        with self._lock:
            record = self._matches.pop(match_id, None)
        if record is None:
            return False
        record.fleets.clear()
        logger.info("ended match", extra={"match_id": match_id})
        return True

    # =========================================================================
    # Placement
    # =========================================================================

    def submit_placement(
        self, match_id: str, participant_id: str, payload: Any
    ) -> ValidatedPlacement:
        """
        Validate and lock in a participant's fleet.

        Raises:
            MatchNotFoundError, NotAParticipantError: routing problems
            PlacementLockedError: a placement was already accepted
            PlacementError: the layout was rejected (match unchanged)
        """
        with self._lock:
            record = self.get_match(match_id)
            self._require_participant(record, participant_id)
            if participant_id in record.fleets:
                raise PlacementLockedError(
                    f"player {participant_id} already placed ships in match {match_id}"
                )

            try:
                placement = validate_placement(payload, grid_size=self.grid_size)
            except PlacementError as e:
                logger.warning(
                    "rejected ship placement",
                    extra={
                        "match_id": match_id,
                        "player": participant_id,
                        "error": e.to_dict(),
                    },
                )
                raise

            record.fleets[participant_id] = Fleet(
                placement=placement,
                hit_record=build_hit_record(placement),
            )
            logger.info(
                "accepted ship placement",
                extra={"match_id": match_id, "player": participant_id},
            )
            return placement

    # =========================================================================
    # Shots
    # =========================================================================

    def fire(self, match_id: str, shooter_id: str, cell: CellPosition) -> ShotOutcome:
        """
        Fire at ``cell`` on the shooter's opponent's board.

        The caller is responsible for bounds checking ``cell``.

        Raises:
            MatchNotFoundError, NotAParticipantError: routing problems
            MatchOverError: the match already has a winner
            MatchNotReadyError: opponent missing or a fleet not yet placed
        """
        with self._lock:
            record = self.get_match(match_id)
            target_id = self._require_participant(record, shooter_id)

            if record.is_over:
                raise MatchOverError(f"match {match_id} is over, {record.winner} won")
            if not record.instance.ready or target_id is None:
                raise MatchNotReadyError(f"match {match_id} is waiting for an opponent")
            target_record = record.hit_record_for(target_id)
            if target_record is None or shooter_id not in record.fleets:
                raise MatchNotReadyError(f"match {match_id} is waiting for ship placement")

            result = record_shot(target_record, cell)
            if result.kind != ShotKind.REPEAT:
                record.shots_fired += 1

            lost = has_lost(target_record)
            if lost:
                record.winner = shooter_id
                logger.info(
                    "match won",
                    extra={"match_id": match_id, "winner": shooter_id, "loser": target_id},
                )

        outcome = ShotOutcome(
            match_id=match_id,
            shooter=shooter_id,
            target=target_id,
            result=result,
            target_lost=lost,
        )
        self._emit(outcome)
        return outcome

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_participant(self, record: MatchRecord, participant_id: str) -> str | None:
        """Resolve the opponent, logging routing failures loudly."""
        try:
            return record.instance.opponent_of(participant_id)
        except NotAParticipantError:
            logger.error(
                "player is not a participant of match",
                extra={"match_id": record.match_id, "player": participant_id},
            )
            raise

    def _emit(self, outcome: ShotOutcome) -> None:
        result = outcome.result
        args = (outcome.match_id, outcome.shooter, outcome.target, result.position)

        if result.kind == ShotKind.MISS:
            self.notifier.miss(*args)
        elif result.kind == ShotKind.HIT:
            self.notifier.hit(*args, result.ship_type)
        elif result.kind == ShotKind.SINK:
            self.notifier.hit(*args, result.ship_type)
            self.notifier.sink(*args, result.ship_type)

        if outcome.target_lost:
            self.notifier.win(outcome.match_id, outcome.shooter)
            self.notifier.lose(outcome.match_id, outcome.target)
