"""
FastAPI Application - HTTP host for the match engine.

Endpoints:
    POST   /api/v1/matches                    Join or open a match
    GET    /api/v1/matches                    List match IDs
    GET    /api/v1/matches/{id}               Get match status
    DELETE /api/v1/matches/{id}               End a match
    POST   /api/v1/matches/{id}/placement     Submit ship placement
    POST   /api/v1/matches/{id}/shots         Fire at the opponent

Logging is configured when the app starts unless the process already set
it up. The event notifier is process-scoped: it is started when the app
starts and closed when the app shuts down.
"""

from contextlib import asynccontextmanager
from typing import Union

from .. import __version__, config
from ..log import setup_logging

# HTTP status per error code
ERROR_STATUS = {
    "VALIDATION_ERROR": 422,
    "INVALID_PLACEMENT": 422,
    "MATCH_NOT_FOUND": 404,
    "NOT_A_PARTICIPANT": 403,
    "MATCH_FULL": 409,
    "ALREADY_JOINED": 409,
    "MATCH_NOT_READY": 409,
    "PLACEMENT_LOCKED": 409,
    "MATCH_OVER": 409,
    "INTERNAL_ERROR": 500,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional MatchService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from ..events import EventNotifier
    from ..match import MatchManager
    from .service import MatchService
    from .schemas import (
        JoinMatchRequest,
        PlacementRequest,
        ShotRequest,
        MatchResponse,
        PlacementResponse,
        ShotResponse,
        ErrorResponse,
        MatchListResponse,
        EndMatchResponse,
        HealthResponse,
    )

    match_service = service or MatchService(
        manager=MatchManager(notifier=EventNotifier.from_config())
    )

    @asynccontextmanager
    async def lifespan(app):
        setup_logging()
        notifier = match_service.manager.notifier
        notifier.start()
        try:
            yield
        finally:
            notifier.close()

    app = FastAPI(
        title="Broadside API",
        description="Ship placement, shots and outcomes for two-player naval combat.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials="*" not in config.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = match_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Wrap an ErrorResponse with its HTTP status."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code.value, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    error_responses = {
        403: {"model": ErrorResponse, "description": "Not a participant"},
        404: {"model": ErrorResponse, "description": "Match not found"},
        409: {"model": ErrorResponse, "description": "Match state conflict"},
        422: {"model": ErrorResponse, "description": "Invalid request or placement"},
    }

    # =========================================================================
    # Match Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/matches",
        response_model=MatchResponse,
        responses=error_responses,
        tags=["Matches"],
        summary="Join an open match or create a new one",
    )
    async def join_match(body: JoinMatchRequest) -> Union[MatchResponse, JSONResponse]:
        return respond(match_service.join(body))

    @app.get(
        "/api/v1/matches",
        response_model=MatchListResponse,
        tags=["Matches"],
        summary="List matches",
    )
    async def list_matches() -> MatchListResponse:
        return match_service.list_matches()

    @app.get(
        "/api/v1/matches/{match_id}",
        response_model=MatchResponse,
        responses=error_responses,
        tags=["Matches"],
        summary="Get match status",
    )
    async def get_match(match_id: str) -> Union[MatchResponse, JSONResponse]:
        return respond(match_service.get_match(match_id))

    @app.delete(
        "/api/v1/matches/{match_id}",
        response_model=EndMatchResponse,
        tags=["Matches"],
        summary="End a match",
    )
    async def end_match(match_id: str) -> EndMatchResponse:
        """End a match and release its state."""
        return match_service.end_match(match_id)

    # =========================================================================
    # Gameplay Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/matches/{match_id}/placement",
        response_model=PlacementResponse,
        responses=error_responses,
        tags=["Gameplay"],
        summary="Lock in ship placement",
    )
    async def submit_placement(
        match_id: str, body: PlacementRequest
    ) -> Union[PlacementResponse, JSONResponse]:
        """
        Submit a fleet layout.

        **Request Body:**
        ```json
        {
            "participant_id": "alice",
            "ships": {
                "Battleship": {"origin": [0, 0], "orientation": "horizontal"},
                "Destroyer": {"origin": [0, 1], "orientation": "vertical"},
                "Submarine": {"origin": [3, 3], "orientation": "horizontal"}
            }
        }
        ```

        Rejections list every schema violation in `details.violations`.
        """
        return respond(match_service.submit_placement(match_id, body))

    @app.post(
        "/api/v1/matches/{match_id}/shots",
        response_model=ShotResponse,
        responses=error_responses,
        tags=["Gameplay"],
        summary="Fire at the opponent's board",
    )
    async def fire(match_id: str, body: ShotRequest) -> Union[ShotResponse, JSONResponse]:
        return respond(match_service.fire(match_id, body))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="broadside",
            version=__version__,
        )

    return app
