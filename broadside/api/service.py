"""
API Service - Business logic layer between the HTTP app and the engine.

The service:
1. Translates requests into MatchManager calls
2. Converts engine errors into ErrorResponse values
3. Formats match records for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .. import config
from ..errors import (
    AlreadyJoinedError,
    BroadsideError,
    MatchFullError,
    MatchNotFoundError,
    MatchNotReadyError,
    MatchOverError,
    NotAParticipantError,
    PlacementError,
    PlacementLockedError,
    SchemaError,
)
from ..match import MatchManager, MatchRecord
from .schemas import (
    EndMatchResponse,
    ErrorCode,
    ErrorResponse,
    JoinMatchRequest,
    MatchListResponse,
    MatchResponse,
    PlacementRequest,
    PlacementResponse,
    ShotRequest,
    ShotResponse,
)

# Most specific class first
_ERROR_CODES: list[tuple[type[BroadsideError], ErrorCode]] = [
    (SchemaError, ErrorCode.VALIDATION_ERROR),
    (PlacementError, ErrorCode.INVALID_PLACEMENT),
    (MatchNotFoundError, ErrorCode.MATCH_NOT_FOUND),
    (NotAParticipantError, ErrorCode.NOT_A_PARTICIPANT),
    (MatchFullError, ErrorCode.MATCH_FULL),
    (AlreadyJoinedError, ErrorCode.ALREADY_JOINED),
    (MatchNotReadyError, ErrorCode.MATCH_NOT_READY),
    (PlacementLockedError, ErrorCode.PLACEMENT_LOCKED),
    (MatchOverError, ErrorCode.MATCH_OVER),
]


def error_response(error: BroadsideError) -> ErrorResponse:
    """Convert an engine error into an ErrorResponse."""
    code = ErrorCode.INTERNAL_ERROR
    for error_type, error_code in _ERROR_CODES:
        if isinstance(error, error_type):
            code = error_code
            break
    return ErrorResponse(error=str(error), error_code=code, details=error.to_dict())


@dataclass
class MatchService:
    """
    Match service for the HTTP API.

    Usage:
        service = MatchService()

        match = service.join(JoinMatchRequest(participant_id="alice"))
        service.submit_placement(match.match_id, PlacementRequest(...))
        shot = service.fire(match.match_id, ShotRequest(...))
    """
    manager: MatchManager = field(default_factory=MatchManager)

    @property
    def grid_size(self) -> int:
        return self.manager.grid_size or config.GRID_SIZE

    def join(self, request: JoinMatchRequest) -> MatchResponse | ErrorResponse:
        try:
            instance = self.manager.join(request.participant_id)
        except BroadsideError as e:
            return error_response(e)
        return self._match_to_response(self.manager.get_match(instance.match_id))

    def get_match(self, match_id: str) -> MatchResponse | ErrorResponse:
        try:
            record = self.manager.get_match(match_id)
        except MatchNotFoundError as e:
            return error_response(e)
        return self._match_to_response(record)

    def list_matches(self) -> MatchListResponse:
        matches = self.manager.list_matches()
        return MatchListResponse(matches=matches, count=len(matches))

    def end_match(self, match_id: str) -> EndMatchResponse:
        return EndMatchResponse(success=self.manager.end_match(match_id), match_id=match_id)

    def submit_placement(
        self, match_id: str, request: PlacementRequest
    ) -> PlacementResponse | ErrorResponse:
        try:
            placement = self.manager.submit_placement(
                match_id, request.participant_id, request.ships
            )
        except BroadsideError as e:
            return error_response(e)
        return PlacementResponse(
            match_id=match_id,
            participant_id=request.participant_id,
            ships=placement.to_payload(),
        )

    def fire(self, match_id: str, request: ShotRequest) -> ShotResponse | ErrorResponse:
        column, row = request.origin
        if column >= self.grid_size or row >= self.grid_size:
            return ErrorResponse(
                error=f"shot origin must be within [0, {self.grid_size - 1}]",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"origin": [column, row]},
            )

        try:
            outcome = self.manager.fire(match_id, request.participant_id, (column, row))
        except BroadsideError as e:
            return error_response(e)

        result = outcome.result
        return ShotResponse(
            match_id=match_id,
            shooter=outcome.shooter,
            target=outcome.target,
            origin=result.position,
            result=result.kind,
            ship_type=result.ship_type.value if result.ship_type else None,
            target_lost=outcome.target_lost,
            winner=outcome.winner,
        )

    def _match_to_response(self, record: MatchRecord) -> MatchResponse:
        instance = record.instance
        return MatchResponse(
            match_id=instance.match_id,
            status=instance.status,
            ready=instance.ready,
            player_a=instance.player_a,
            player_b=instance.player_b,
            placed=list(record.fleets),
            winner=record.winner,
            shots_fired=record.shots_fired,
            created_at=record.created_at,
        )
