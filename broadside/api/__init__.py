"""
API Module - HTTP interface for game clients.

Clients:
1. Join a match (paired into an open one or a new one)
2. Submit their ship placement
3. Fire shots until one fleet is gone

All state is process-scoped. Nothing is persisted.
"""

from .schemas import (
    # Requests
    JoinMatchRequest,
    PlacementRequest,
    ShotRequest,
    # Responses
    MatchResponse,
    PlacementResponse,
    ShotResponse,
    MatchListResponse,
    EndMatchResponse,
    ErrorResponse,
    ErrorCode,
)
from .service import MatchService
from .app import create_app

__all__ = [
    # Requests
    "JoinMatchRequest",
    "PlacementRequest",
    "ShotRequest",
    # Responses
    "MatchResponse",
    "PlacementResponse",
    "ShotResponse",
    "MatchListResponse",
    "EndMatchResponse",
    "ErrorResponse",
    "ErrorCode",
    # Service
    "MatchService",
    "create_app",
]
