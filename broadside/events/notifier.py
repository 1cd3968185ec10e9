"""
Event Notifier - Fire-and-forget game events for external consumers.

Events are sent as CloudEvents 1.0 in binary content mode: the event
attributes travel as ``ce-*`` HTTP headers and the data is the JSON body.

Delivery never affects game state. Every send happens on a background
worker; failures are logged and dropped.

The notifier owns a keep-alive HTTP session and a worker pool, so it has
an explicit lifecycle:

    notifier = EventNotifier(broker_url="http://broker/")
    notifier.start()
    ...
    notifier.close()
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from enum import Enum
from typing import Any
import json
import logging
import time
import uuid

import requests
from pydantic import BaseModel, ConfigDict, Field

from .. import config
from ..board.ships import CellPosition, ShipType

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """CloudEvent ``type`` values."""
    HIT = "hit"
    MISS = "miss"
    SINK = "sink"
    WIN = "win"
    LOSE = "lose"


# =============================================================================
# Event data
# =============================================================================

class ShotEventData(BaseModel):
    """Common envelope for shot events."""
    model_config = ConfigDict(populate_by_name=True)

    ts: int = Field(..., description="Milliseconds since the epoch")
    by: str = Field(..., description="Participant who fired")
    game: str
    match: str
    against: str = Field(..., description="Participant who was fired at")
    origin: str = Field(..., description="Target cell as 'column,row'")
    ship_type: ShipType | None = Field(None, alias="type")


class OutcomeEventData(BaseModel):
    """Data for win and lose events."""
    game: str
    match: str
    player: str


def now_ms() -> int:
    return int(time.time() * 1000)


def format_origin(cell: CellPosition) -> str:
    return f"{cell[0]},{cell[1]}"


# =============================================================================
# Notifier
# =============================================================================

class EventNotifier:
    """
    Sends game events to a CloudEvents broker.

    With no broker URL, events are only logged.
    """

    def __init__(
        self,
        broker_url: str | None = None,
        source: str = config.EVENT_SOURCE,
        game_id: str = config.GAME_ID,
        timeout: float = 5.0,
        max_workers: int = 2,
        session: requests.Session | None = None,
    ):
        self.broker_url = broker_url
        self.source = source
        self.game_id = game_id
        self.timeout = timeout
        self.max_workers = max_workers
        self._session = session
        self._owns_session = session is None
        self._executor: ThreadPoolExecutor | None = None

    @classmethod
    def from_config(cls) -> EventNotifier:
        return cls(broker_url=config.EVENT_BROKER_URL)

    @property
    def enabled(self) -> bool:
        return bool(self.broker_url)

    @property
    def running(self) -> bool:
        return self._executor is not None

    def start(self) -> None:
        if self._executor is not None:
            return
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="broadside-events"
        )
        logger.info("event notifier started", extra={"broker_url": self.broker_url})

    def close(self) -> None:
        """Wait for in-flight events, then release the pool and session."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
        logger.info("event notifier closed")

    def __enter__(self) -> EventNotifier:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Event helpers
    # -------------------------------------------------------------------------

    def hit(self, match_id: str, by: str, against: str, cell: CellPosition, ship_type: ShipType):
        self.send(EventType.HIT, self._shot_data(match_id, by, against, cell, ship_type))

    def miss(self, match_id: str, by: str, against: str, cell: CellPosition):
        self.send(EventType.MISS, self._shot_data(match_id, by, against, cell))

    def sink(self, match_id: str, by: str, against: str, cell: CellPosition, ship_type: ShipType):
        self.send(EventType.SINK, self._shot_data(match_id, by, against, cell, ship_type))

    def win(self, match_id: str, player: str):
        self.send(EventType.WIN, OutcomeEventData(game=self.game_id, match=match_id, player=player))

    def lose(self, match_id: str, player: str):
        self.send(EventType.LOSE, OutcomeEventData(game=self.game_id, match=match_id, player=player))

    def _shot_data(
        self,
        match_id: str,
        by: str,
        against: str,
        cell: CellPosition,
        ship_type: ShipType | None = None,
    ) -> ShotEventData:
        return ShotEventData(
            ts=now_ms(),
            by=by,
            game=self.game_id,
            match=match_id,
            against=against,
            origin=format_origin(cell),
            ship_type=ship_type,
        )

    # -------------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------------

    def build_request(self, event_type: EventType, data: BaseModel) -> tuple[dict[str, str], str]:
        """Headers and body for a binary-mode CloudEvent."""
        headers = {
            "ce-specversion": "1.0",
            "ce-id": str(uuid.uuid4()),
            "ce-source": self.source,
            "ce-type": event_type.value,
            "ce-time": datetime.now(timezone.utc).isoformat(),
            "content-type": "application/json",
        }
        body = json.dumps(data.model_dump(mode="json", by_alias=True, exclude_none=True))
        return headers, body

    def send(self, event_type: EventType, data: BaseModel) -> None:
        """Queue an event for delivery. Never raises."""
        headers, body = self.build_request(event_type, data)
        logger.debug("sending cloud event", extra={"ce_type": event_type.value, "body": body})

        if not self.enabled:
            return
        if self._executor is None:
            logger.warning(
                "event notifier not started, dropping event",
                extra={"ce_type": event_type.value},
            )
            return
        try:
            self._executor.submit(self._post, headers, body)
        except RuntimeError:
            logger.warning("event notifier shut down, dropping event", exc_info=True)

    def _post(self, headers: dict[str, str], body: str) -> None:
        try:
            res = self._session.post(
                self.broker_url, headers=headers, data=body, timeout=self.timeout
            )
            res.raise_for_status()
            logger.debug(
                "sent cloud event",
                extra={"ce_type": headers["ce-type"], "status_code": res.status_code},
            )
        except requests.RequestException:
            logger.error(
                "error sending cloud event",
                extra={"ce_type": headers["ce-type"]},
                exc_info=True,
            )
