"""
Configuration - Process settings read from the environment.

All values are resolved once at import. The board dimension is shared by
the validator, the hit record and the API schemas, so it lives here and
nowhere else.
"""

import os

from .board.ships import SHIP_LENGTHS


def resolve_grid_size(raw: str | None = None) -> int:
    """
    Parse and check a board dimension.

    Raises ValueError if the value is not an integer or the board is too
    small to hold the longest ship.
    """
    if raw is None:
        raw = os.getenv("BROADSIDE_GRID_SIZE", "5")
    try:
        size = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"BROADSIDE_GRID_SIZE must be an integer, got {raw!r}")

    longest = max(SHIP_LENGTHS.values())
    if size < longest:
        raise ValueError(
            f"BROADSIDE_GRID_SIZE must be at least {longest} to fit every ship, got {size}"
        )
    return size


# Environment configuration
BROADSIDE_ENV = os.getenv("BROADSIDE_ENV", "development")
GRID_SIZE = resolve_grid_size()
EVENT_BROKER_URL = os.getenv("BROADSIDE_EVENT_BROKER_URL") or None
GAME_ID = os.getenv("BROADSIDE_GAME_ID", "broadside")
EVENT_SOURCE = "broadside"
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").lower()
