"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- VALIDATION_ERROR: Placement payload or request failed schema validation
- INVALID_PLACEMENT: Ships overlap or extend past the board
- MATCH_NOT_FOUND: Match does not exist or has ended
- NOT_A_PARTICIPANT: Caller is not a player in the match
- MATCH_FULL: Both player slots are taken
- ALREADY_JOINED: Participant already holds a slot in the match
- MATCH_NOT_READY: Opponent or placements missing
- PLACEMENT_LOCKED: Ships were already placed
- MATCH_OVER: Match already has a winner
"""

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field

from ..board.hits import ShotKind
from ..match.instance import MatchStatus


class ErrorCode(str, Enum):
    """Structured error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PLACEMENT = "INVALID_PLACEMENT"
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    NOT_A_PARTICIPANT = "NOT_A_PARTICIPANT"
    MATCH_FULL = "MATCH_FULL"
    ALREADY_JOINED = "ALREADY_JOINED"
    MATCH_NOT_READY = "MATCH_NOT_READY"
    PLACEMENT_LOCKED = "PLACEMENT_LOCKED"
    MATCH_OVER = "MATCH_OVER"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class JoinMatchRequest(BaseModel):
    """Request to join (or open) a match."""
    participant_id: str = Field(..., min_length=1, description="Opaque player ID")


class PlacementRequest(BaseModel):
    """Request to lock in a fleet layout."""
    participant_id: str = Field(..., min_length=1)
    ships: Any = Field(
        ...,
        description='Ship type -> {"origin": [column, row], "orientation": "horizontal"|"vertical"}',
    )


class ShotRequest(BaseModel):
    """Request to fire at the opponent's board."""
    participant_id: str = Field(..., min_length=1)
    origin: tuple[Annotated[int, Field(ge=0)], Annotated[int, Field(ge=0)]] = Field(
        ..., description="[column, row] of the target cell"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class MatchResponse(BaseModel):
    """Pairing and progress of a match."""
    match_id: str
    status: MatchStatus
    ready: bool
    player_a: Optional[str] = None
    player_b: Optional[str] = None
    placed: list[str] = Field(default_factory=list, description="Players whose ships are locked in")
    winner: Optional[str] = None
    shots_fired: int = 0
    created_at: float = 0.0
    api_version: str = "v1"


class PlacementResponse(BaseModel):
    """Response after a placement was accepted."""
    match_id: str
    participant_id: str
    ships: dict[str, Any]
    api_version: str = "v1"


class ShotResponse(BaseModel):
    """Result of a shot."""
    match_id: str
    shooter: str
    target: str
    origin: tuple[int, int]
    result: ShotKind
    ship_type: Optional[str] = Field(None, description="Set when a ship was hit or sunk")
    target_lost: bool = False
    winner: Optional[str] = None
    api_version: str = "v1"


class MatchListResponse(BaseModel):
    """Response listing match IDs."""
    matches: list[str]
    count: int


class EndMatchResponse(BaseModel):
    """Response after ending a match."""
    success: bool
    match_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
